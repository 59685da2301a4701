from unittest.mock import MagicMock

import pytest
from docker.errors import APIError, ImageNotFound

from ecrimage.auth import RegistryCredential
from ecrimage.clients import DockerEngineClient
from ecrimage.core.exceptions import (
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)

HOST = "012345678912.dkr.ecr.us-west-2.amazonaws.com"
URI = f"{HOST}/repository"
CREDENTIAL = RegistryCredential(username="AWS", password="secret")


def create_client() -> tuple[MagicMock, DockerEngineClient]:
    docker_client = MagicMock()
    return docker_client, DockerEngineClient(client=docker_client)


def api_error(status_code: int) -> APIError:
    response = MagicMock(status_code=status_code)
    return APIError("engine error", response=response, explanation="nope")


def test_tag_image():
    docker_client, client = create_client()
    image = docker_client.images.get.return_value
    image.tag.return_value = True

    client.tag_image("repository:v1", URI, "v1")

    docker_client.images.get.assert_called_once_with("repository:v1")
    image.tag.assert_called_once_with(URI, tag="v1")


def test_tag_image_not_found():
    docker_client, client = create_client()
    docker_client.images.get.side_effect = ImageNotFound("missing")

    with pytest.raises(NotFoundError):
        client.tag_image("repository:v1", URI, "v1")


def test_tag_image_rejected():
    docker_client, client = create_client()
    docker_client.images.get.return_value.tag.return_value = False

    with pytest.raises(InternalError):
        client.tag_image("repository:v1", URI, "v1")


def test_push_image():
    docker_client, client = create_client()
    docker_client.images.push.return_value = iter(
        [
            {"status": "Preparing", "id": "abc"},
            {"status": "Pushed", "id": "abc"},
            {"status": "v1: digest: sha256:00 size: 1"},
        ]
    )

    client.push_image(URI, "v1", HOST, CREDENTIAL)

    docker_client.images.push.assert_called_once_with(
        URI,
        tag="v1",
        auth_config=dict(
            username="AWS", password="secret", serveraddress=HOST
        ),
        stream=True,
        decode=True,
    )


def test_push_image_keeps_credential_server_address():
    docker_client, client = create_client()
    docker_client.images.push.return_value = iter([])
    credential = RegistryCredential(
        username="AWS", password="secret", server_address=f"https://{HOST}"
    )

    client.push_image(URI, "v1", HOST, credential)

    _, kwargs = docker_client.images.push.call_args
    assert kwargs["auth_config"]["serveraddress"] == f"https://{HOST}"


def test_push_image_stream_error():
    docker_client, client = create_client()
    docker_client.images.push.return_value = iter(
        [
            {"status": "Preparing", "id": "abc"},
            {
                "error": "denied",
                "errorDetail": {"message": "denied: not authorized"},
            },
        ]
    )

    with pytest.raises(InternalError) as exc_info:
        client.push_image(URI, "v1", HOST, CREDENTIAL)

    assert "not authorized" in str(exc_info.value)


@pytest.mark.parametrize(
    "status_code, error_type",
    [
        (401, UnauthorizedError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (500, InternalError),
    ],
)
def test_push_image_api_error(status_code: int, error_type: type):
    docker_client, client = create_client()
    docker_client.images.push.side_effect = api_error(status_code)

    with pytest.raises(error_type):
        client.push_image(URI, "v1", HOST, CREDENTIAL)


def test_pull_image_by_digest():
    docker_client, client = create_client()
    digest = "sha256:0b3787ac21ffb4edbd6710e0e60f991d"

    client.pull_image(URI, digest, CREDENTIAL)

    docker_client.images.pull.assert_called_once_with(
        URI,
        tag=digest,
        auth_config=dict(username="AWS", password="secret"),
    )


def test_pull_image_not_found():
    docker_client, client = create_client()
    docker_client.images.pull.side_effect = ImageNotFound("missing")

    with pytest.raises(NotFoundError):
        client.pull_image(URI, "v1", CREDENTIAL)
