from unittest.mock import call

import pytest

from ecrimage.auth import AuthorizationGrant
from ecrimage.core.exceptions import (
    AmbiguousReferenceError,
    NotFoundError,
    PullStepError,
    UnauthorizedError,
    UsageError,
)

from ._services import (
    CREDENTIAL,
    HOST_URI,
    IMAGE,
    REGISTRY_ID,
    REPOSITORY,
    REPOSITORY_URI,
    SHA,
    TAG,
    create_puller,
    create_services,
)


@pytest.mark.parametrize(
    "image, tag_or_digest",
    [
        (IMAGE, TAG),
        (f"{REPOSITORY}@{SHA}", SHA),
        (REPOSITORY, "latest"),
    ],
)
def test_pull_without_host(image: str, tag_or_digest: str):
    services = create_services()

    result = create_puller(services).pull([image])

    assert services.mock_calls == [
        call.sts.get_account_id(),
        call.ecr.get_authorization_token_by_account_id(REGISTRY_ID),
        call.docker.pull_image(REPOSITORY_URI, tag_or_digest, CREDENTIAL),
    ]
    assert result.repository_uri == REPOSITORY_URI
    assert result.tag_or_digest == tag_or_digest
    assert result.states == []


def test_pull_with_host():
    services = create_services()
    grant = AuthorizationGrant(registry_host=HOST_URI, credential=CREDENTIAL)
    services.ecr.get_authorization_token.return_value = grant

    result = create_puller(services).pull([f"{HOST_URI}/hi/repo@{SHA}"])

    assert services.mock_calls == [
        call.ecr.get_authorization_token(HOST_URI),
        call.docker.pull_image(f"{HOST_URI}/hi/repo", SHA, CREDENTIAL),
    ]
    assert result.registry_host == HOST_URI


@pytest.mark.parametrize("images", [[], [IMAGE, IMAGE]])
def test_pull_requires_one_image(images: list[str]):
    services = create_services()

    with pytest.raises(UsageError):
        create_puller(services).pull(images)

    assert services.mock_calls == []


def test_pull_ambiguous_reference():
    services = create_services()

    with pytest.raises(AmbiguousReferenceError):
        create_puller(services).pull([f"{REPOSITORY}:{TAG}@{SHA}"])

    assert services.mock_calls == []


def test_pull_authorization_failure():
    services = create_services()
    error = UnauthorizedError("expired")
    services.sts.get_account_id.side_effect = error

    with pytest.raises(PullStepError) as exc_info:
        create_puller(services).pull([IMAGE])

    assert exc_info.value.step == "resolve_authorization"
    assert exc_info.value.error is error
    assert exc_info.value.status_code == 401
    services.docker.pull_image.assert_not_called()


def test_pull_engine_failure():
    services = create_services()
    error = NotFoundError("manifest unknown")
    services.docker.pull_image.side_effect = error

    with pytest.raises(PullStepError) as exc_info:
        create_puller(services).pull([IMAGE])

    assert exc_info.value.step == "pull_image"
    assert exc_info.value.__cause__ is error
    assert exc_info.value.status_code == 404
