"""
Amazon ECR service adapter.

Covers registry authorization, repository management and paginated image
listing. botocore error codes are translated to core exceptions.
"""

__all__ = ["EcrClient"]

import base64
from typing import Any, Iterator

from botocore.config import Config

from ecrimage.auth import AuthorizationGrant, RegistryCredential
from ecrimage.core import get_logger
from ecrimage.core.exceptions import (
    BadRequestError,
    InternalError,
    NotFoundError,
)
from ecrimage.image._models import ImageDetail, ImageFilter
from ecrimage.reference import RegistryHost, parse_registry_host

from ._errors import translate_client_errors

logger = get_logger(__name__)


class EcrClient:
    session: Any
    registry_id: str | None
    nparams: dict[str, Any]

    _client: Any
    _regional_clients: dict[tuple[str, bool], Any]

    def __init__(
        self,
        session: Any,
        region: str | None = None,
        registry_id: str | None = None,
        nparams: dict[str, Any] | None = None,
        client: Any | None = None,
    ):
        """Initialize.

        Args:
            session:
                boto3 session used to create ECR clients.
            region:
                Default region. None uses the session's region.
            registry_id:
                Account whose registry holds the repositories.
                None uses the caller's account.
            nparams:
                Additional parameters for the ECR client.
            client:
                Prebuilt ECR client for the default region.
        """
        self.session = session
        self.registry_id = registry_id
        self.nparams = nparams or dict()
        self._client = client or session.client(
            "ecr", region_name=region, **self.nparams
        )
        self._regional_clients = dict()

    def get_authorization_token(
        self, registry_host: str
    ) -> AuthorizationGrant:
        host = self._parse_host(registry_host)
        client = self._get_client_for(host)
        with translate_client_errors():
            response = client.get_authorization_token(
                registryIds=[host.registry_id]
            )
        return self._convert_authorization(response)

    def get_authorization_token_by_account_id(
        self, account_id: str
    ) -> AuthorizationGrant:
        with translate_client_errors():
            response = self._client.get_authorization_token(
                registryIds=[account_id]
            )
        return self._convert_authorization(response)

    def repository_exists(
        self, name: str, registry_host: str | None = None
    ) -> bool:
        """Check whether a repository exists.

        Args:
            name: Repository name.
            registry_host:
                Registry holding the repository. Its account and region
                are used. None uses the configured registry.
        """
        client, registry_args = self._repository_target(registry_host)
        try:
            with translate_client_errors():
                client.describe_repositories(
                    repositoryNames=[name], **registry_args
                )
        except NotFoundError:
            return False
        return True

    def create_repository(
        self, name: str, registry_host: str | None = None
    ) -> str:
        client, registry_args = self._repository_target(registry_host)
        with translate_client_errors():
            response = client.create_repository(
                repositoryName=name, **registry_args
            )
        logger.info("created repository", repository=name, **registry_args)
        return response["repository"]["repositoryName"]

    def get_images(
        self, image_filter: ImageFilter
    ) -> Iterator[list[ImageDetail]]:
        """Yield image records one page at a time.

        Args:
            image_filter:
                Repositories, tag status and registry to list.
                No repository names means every repository.

        Yields:
            One list of image records per describe_images page.
        """
        registry_args = self._registry_args(image_filter.registry_id)
        repository_names = (
            image_filter.repository_names
            or self._iter_repository_names(registry_args)
        )
        with translate_client_errors():
            paginator = self._client.get_paginator("describe_images")
            for repository_name in repository_names:
                for page in paginator.paginate(
                    repositoryName=repository_name,
                    filter={"tagStatus": image_filter.tag_status.value},
                    **registry_args,
                ):
                    yield [
                        self._convert_image_detail(image_detail)
                        for image_detail in page.get("imageDetails", [])
                    ]

    def _iter_repository_names(
        self, registry_args: dict[str, str]
    ) -> Iterator[str]:
        paginator = self._client.get_paginator("describe_repositories")
        for page in paginator.paginate(**registry_args):
            for repository in page.get("repositories", []):
                yield repository["repositoryName"]

    def _registry_args(self, registry_id: str | None = None) -> dict:
        registry_id = registry_id or self.registry_id
        if registry_id:
            return dict(registryId=registry_id)
        return dict()

    def _parse_host(self, registry_host: str) -> RegistryHost:
        host = parse_registry_host(registry_host)
        if host is None:
            raise BadRequestError(
                f"Unsupported registry endpoint '{registry_host}'"
            )
        return host

    def _repository_target(
        self, registry_host: str | None
    ) -> tuple[Any, dict]:
        if registry_host is None:
            return self._client, self._registry_args()
        host = self._parse_host(registry_host)
        return self._get_client_for(host), dict(registryId=host.registry_id)

    def _get_client_for(self, host: RegistryHost) -> Any:
        if not host.fips and host.region == self._client.meta.region_name:
            return self._client
        key = (host.region, host.fips)
        if key not in self._regional_clients:
            params = dict(self.nparams)
            if host.fips:
                params["config"] = Config(use_fips_endpoint=True)
            self._regional_clients[key] = self.session.client(
                "ecr", region_name=host.region, **params
            )
        return self._regional_clients[key]

    def _convert_authorization(self, response: dict) -> AuthorizationGrant:
        authorization_data = response.get("authorizationData") or []
        if not authorization_data:
            raise InternalError("No authorization data returned by ECR")
        auth_data = authorization_data[0]
        token = auth_data["authorizationToken"]
        endpoint = auth_data["proxyEndpoint"]
        username, password = base64.b64decode(token).decode().split(":", 1)
        expires_at = auth_data.get("expiresAt")
        return AuthorizationGrant(
            registry_host=endpoint.replace("https://", "", 1),
            credential=RegistryCredential(
                username=username,
                password=password,
                server_address=endpoint,
            ),
            expires_at=expires_at.timestamp() if expires_at else None,
        )

    def _convert_image_detail(self, image_detail: dict) -> ImageDetail:
        pushed_at = image_detail.get("imagePushedAt")
        return ImageDetail(
            repository_name=image_detail["repositoryName"],
            digest=image_detail["imageDigest"],
            tags=image_detail.get("imageTags") or [],
            pushed_at=pushed_at.timestamp() if pushed_at else None,
            size_bytes=image_detail.get("imageSizeInBytes"),
        )
