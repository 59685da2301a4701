"""
Docker engine adapter for image tag, push and pull.
"""

__all__ = ["DockerEngineClient"]

from typing import Any

import docker
from docker.errors import APIError, ImageNotFound

from ecrimage.auth import RegistryCredential
from ecrimage.core import get_logger
from ecrimage.core.exceptions import (
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)

logger = get_logger(__name__)


def _convert_api_error(e: APIError) -> Exception:
    message = e.explanation or str(e)
    if e.status_code == 401:
        return UnauthorizedError(message)
    if e.status_code == 403:
        return ForbiddenError(message)
    if e.status_code == 404:
        return NotFoundError(message)
    return InternalError(message)


class DockerEngineClient:
    base_url: str | None

    _client: Any

    def __init__(
        self,
        base_url: str | None = None,
        client: Any | None = None,
    ):
        """Initialize.

        Args:
            base_url:
                Docker daemon URL. None uses the environment
                (DOCKER_HOST and friends).
            client:
                Prebuilt docker client.
        """
        self.base_url = base_url
        self._client = client

    def tag_image(self, source: str, target_uri: str, tag: str) -> None:
        client = self._get_client()
        try:
            image = client.images.get(source)
            tagged = image.tag(target_uri, tag=tag)
        except ImageNotFound as e:
            raise NotFoundError(f"Image {source} not found locally") from e
        except APIError as e:
            raise _convert_api_error(e) from e
        if not tagged:
            raise InternalError(f"Could not tag {source} as {target_uri}")
        logger.debug(
            "tagged image", source=source, target=target_uri, tag=tag
        )

    def push_image(
        self,
        target_uri: str,
        tag: str,
        registry_host: str,
        credential: RegistryCredential,
    ) -> None:
        auth_config = credential.to_auth_config()
        auth_config.setdefault("serveraddress", registry_host)
        client = self._get_client()
        try:
            for line in client.images.push(
                target_uri,
                tag=tag,
                auth_config=auth_config,
                stream=True,
                decode=True,
            ):
                self._check_progress(line)
        except APIError as e:
            raise _convert_api_error(e) from e

    def pull_image(
        self,
        target_uri: str,
        tag_or_digest: str,
        credential: RegistryCredential,
    ) -> None:
        client = self._get_client()
        try:
            client.images.pull(
                target_uri,
                tag=tag_or_digest,
                auth_config=credential.to_auth_config(),
            )
        except ImageNotFound as e:
            raise NotFoundError(
                f"Image {target_uri}:{tag_or_digest} not found"
            ) from e
        except APIError as e:
            raise _convert_api_error(e) from e

    def _check_progress(self, line: dict) -> None:
        if "error" in line:
            detail = line.get("errorDetail") or {}
            raise InternalError(detail.get("message") or line["error"])
        if "status" in line:
            logger.debug(
                "push progress", status=line["status"], layer=line.get("id")
            )

    def _get_client(self) -> Any:
        if self._client is None:
            if self.base_url:
                self._client = docker.DockerClient(base_url=self.base_url)
            else:
                self._client = docker.from_env()
        return self._client
