from typing import Any, TextIO

import boto3

from ecrimage.auth import AuthorizationResolver
from ecrimage.clients import (
    DockerEngineClient,
    EcrClient,
    StsClient,
    TaggingClient,
)
from ecrimage.core import Context, Provider, Response

from .._list import ImageLister
from .._models import ImageFilter, ImageTransferItem
from .._pull import PullOrchestrator
from .._push import PushOrchestrator


class AmazonElasticContainerRegistry(Provider):
    region: str | None
    registry_id: str | None
    aws_access_key_id: str | None
    aws_secret_access_key: str | None
    aws_session_token: str | None
    profile_name: str | None
    docker_base_url: str | None
    nparams: dict[str, Any]

    _init: bool = False
    _sts_client: Any
    _ecr_client: Any
    _tagging_client: Any
    _engine_client: Any
    _pusher: PushOrchestrator
    _puller: PullOrchestrator
    _lister: ImageLister

    def __init__(
        self,
        region: str | None = None,
        registry_id: str | None = None,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        aws_session_token: str | None = None,
        profile_name: str | None = None,
        docker_base_url: str | None = None,
        nparams: dict[str, Any] | None = None,
        sts_client: Any | None = None,
        ecr_client: Any | None = None,
        tagging_client: Any | None = None,
        engine_client: Any | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            region:
                AWS region where the ECR registry is located.
                If None, uses the session's default region.
            registry_id:
                AWS account ID that owns the ECR registry.
                If None, uses the caller's account.
            aws_access_key_id:
                AWS access key ID for authentication.
            aws_secret_access_key:
                AWS secret access key for authentication.
            aws_session_token:
                AWS session token for temporary credentials.
            profile_name:
                AWS profile name to use for authentication.
            docker_base_url:
                Docker daemon URL. If None, uses the environment.
            nparams:
                Additional parameters for the boto3 clients.
            sts_client:
                Account identity service to use instead of STS.
            ecr_client:
                Registry service to use instead of ECR.
            tagging_client:
                Resource tagging service to use instead of the
                Resource Groups Tagging API.
            engine_client:
                Local engine client to use instead of docker.
        """
        self.region = region
        self.registry_id = registry_id
        self.aws_access_key_id = aws_access_key_id
        self.aws_secret_access_key = aws_secret_access_key
        self.aws_session_token = aws_session_token
        self.profile_name = profile_name
        self.docker_base_url = docker_base_url
        self.nparams = nparams or dict()
        self._sts_client = sts_client
        self._ecr_client = ecr_client
        self._tagging_client = tagging_client
        self._engine_client = engine_client
        self._init = False
        super().__init__(**kwargs)

    def __setup__(self, context: Context | None = None) -> None:
        if self._init:
            return

        if (
            self._sts_client is None
            or self._ecr_client is None
            or self._tagging_client is None
        ):
            session = self._create_session()
            if self._sts_client is None:
                self._sts_client = StsClient(session, nparams=self.nparams)
            if self._ecr_client is None:
                self._ecr_client = EcrClient(
                    session,
                    region=self.region,
                    registry_id=self.registry_id,
                    nparams=self.nparams,
                )
            if self._tagging_client is None:
                self._tagging_client = TaggingClient(
                    session, region=self.region, nparams=self.nparams
                )
        if self._engine_client is None:
            self._engine_client = DockerEngineClient(
                base_url=self.docker_base_url
            )

        resolver = AuthorizationResolver(
            identity_service=self._sts_client,
            auth_service=self._ecr_client,
        )
        self._pusher = PushOrchestrator(
            engine_client=self._engine_client,
            repository_service=self._ecr_client,
            auth_resolver=resolver,
            tagging_service=self._tagging_client,
        )
        self._puller = PullOrchestrator(
            engine_client=self._engine_client,
            auth_resolver=resolver,
        )
        self._lister = ImageLister(registry_service=self._ecr_client)
        self._init = True

    def _create_session(self) -> Any:
        session_kwargs = {}
        if self.aws_access_key_id:
            session_kwargs["aws_access_key_id"] = self.aws_access_key_id
        if self.aws_secret_access_key:
            session_kwargs["aws_secret_access_key"] = (
                self.aws_secret_access_key
            )
        if self.aws_session_token:
            session_kwargs["aws_session_token"] = self.aws_session_token
        if self.profile_name:
            session_kwargs["profile_name"] = self.profile_name
        if self.region:
            session_kwargs["region_name"] = self.region
        return boto3.Session(**session_kwargs)

    def push(
        self,
        images: list[str],
        resource_tags: dict[str, str] | None = None,
        registry_id: str | None = None,
    ) -> Response[ImageTransferItem]:
        self.__setup__()
        result = self._pusher.push(
            images,
            resource_tags=resource_tags,
            registry_id=registry_id or self.registry_id,
        )
        return Response(result=result)

    def pull(
        self,
        images: list[str],
        registry_id: str | None = None,
    ) -> Response[ImageTransferItem]:
        self.__setup__()
        result = self._puller.pull(
            images, registry_id=registry_id or self.registry_id
        )
        return Response(result=result)

    def list_images(
        self,
        image_filter: ImageFilter | None = None,
        out: TextIO | None = None,
    ) -> Response[int]:
        self.__setup__()
        image_filter = image_filter or ImageFilter()
        if image_filter.registry_id is None and self.registry_id:
            image_filter = image_filter.copy(
                update=dict(registry_id=self.registry_id)
            )
        result = self._lister.list_images(image_filter, out=out)
        return Response(result=result)

    def close(self) -> Response[None]:
        self._init = False
        return Response(result=None)
