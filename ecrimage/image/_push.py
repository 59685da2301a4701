"""
Push orchestration.

A push runs a fixed sequence of named steps. Each step returns the state
it reached, or None when its precondition says it does not apply. The
first failing step stops the sequence and is reported by name. Nothing
done by earlier steps is rolled back.
"""

__all__ = ["PushOrchestrator"]

from typing import Any, Callable

from ecrimage.auth import AuthorizationGrant, AuthorizationResolver
from ecrimage.core import get_logger, warn
from ecrimage.core.exceptions import (
    BadRequestError,
    ConflictError,
    PushStepError,
    UsageError,
)
from ecrimage.reference import (
    PUSH_FORMAT,
    ImageReference,
    ReferenceParser,
    parse_registry_host,
)

from ._models import ImageTransferItem, PushState, RepositoryState

logger = get_logger(__name__)

DEFAULT_TAG = "latest"


class _PushPlan:
    image: str
    reference: ImageReference
    resource_tags: dict[str, str]
    registry_id: str | None
    grant: AuthorizationGrant
    repository_uri: str
    repository: RepositoryState
    states: list[PushState]

    def __init__(
        self,
        image: str,
        reference: ImageReference,
        resource_tags: dict[str, str],
        registry_id: str | None,
    ):
        self.image = image
        self.reference = reference
        self.resource_tags = resource_tags
        self.registry_id = registry_id
        self.repository = RepositoryState()
        self.states = [PushState.INIT]

    @property
    def tag(self) -> str:
        return self.reference.tag or DEFAULT_TAG


class PushOrchestrator:
    engine_client: Any
    repository_service: Any
    auth_resolver: AuthorizationResolver
    tagging_service: Any | None

    def __init__(
        self,
        engine_client: Any,
        repository_service: Any,
        auth_resolver: AuthorizationResolver,
        tagging_service: Any | None = None,
    ):
        """Initialize.

        Args:
            engine_client:
                Local engine exposing tag_image and push_image.
            repository_service:
                Registry exposing repository_exists and create_repository.
            auth_resolver:
                Resolver producing the authorization grant.
            tagging_service:
                Optional service exposing tag_resources.
        """
        self.engine_client = engine_client
        self.repository_service = repository_service
        self.auth_resolver = auth_resolver
        self.tagging_service = tagging_service

    def push(
        self,
        images: list[str],
        resource_tags: dict[str, str] | None = None,
        registry_id: str | None = None,
    ) -> ImageTransferItem:
        """Push a local image to the registry.

        Args:
            images: Positional image arguments. Exactly one is required.
            resource_tags: Resource tags applied to the repository.
            registry_id: Registry account used when the image has no host.

        Returns:
            Transfer result with the states reached.

        Raises:
            UsageError: Not exactly one image was given.
            ReferenceParseError: The image reference is malformed.
            PushStepError: A push step failed.
        """
        if len(images) != 1:
            raise UsageError(
                f"push requires exactly 1 image argument, got {len(images)}"
            )
        image = images[0]
        reference = ReferenceParser.parse(image, PUSH_FORMAT)
        tags = dict(resource_tags or {})
        if tags and self.tagging_service is None:
            raise BadRequestError(
                "Resource tags were given but no tagging service is set"
            )

        plan = _PushPlan(
            image=image,
            reference=reference,
            resource_tags=tags,
            registry_id=registry_id,
        )
        for name, step in self._steps():
            try:
                state = step(plan)
            except Exception as e:
                logger.debug("push step failed", step=name, error=str(e))
                raise PushStepError(name, e) from e
            if state is None:
                logger.debug("push step skipped", step=name)
                continue
            logger.debug("push step done", step=name, state=state.value)
            plan.states.append(state)

        return ImageTransferItem(
            image=image,
            repository_uri=plan.repository_uri,
            tag_or_digest=plan.tag,
            registry_host=plan.grant.registry_host,
            states=plan.states,
            repository=plan.repository,
        )

    def _steps(
        self,
    ) -> list[tuple[str, Callable[[_PushPlan], PushState | None]]]:
        return [
            ("resolve_authorization", self._resolve_authorization),
            ("retag_image", self._retag_image),
            ("check_repository", self._check_repository),
            ("create_repository", self._create_repository),
            ("tag_repository", self._tag_repository),
            ("push_image", self._push_image),
        ]

    def _resolve_authorization(self, plan: _PushPlan) -> PushState:
        plan.grant = self.auth_resolver.resolve(
            plan.reference, registry_id=plan.registry_id
        )
        plan.repository_uri = (
            f"{plan.grant.registry_host}/{plan.reference.repository}"
        )
        return PushState.AUTH_RESOLVED

    def _retag_image(self, plan: _PushPlan) -> PushState | None:
        # An explicit host means the local image already carries the
        # registry name.
        if plan.reference.registry_host:
            return None
        self.engine_client.tag_image(
            plan.image, plan.repository_uri, plan.tag
        )
        return PushState.RETAGGED

    def _check_repository(self, plan: _PushPlan) -> PushState:
        plan.repository.exists = self.repository_service.repository_exists(
            plan.reference.repository,
            registry_host=plan.grant.registry_host,
        )
        return PushState.EXISTENCE_CHECKED

    def _create_repository(self, plan: _PushPlan) -> PushState | None:
        if plan.repository.exists:
            return None
        try:
            created_name = self.repository_service.create_repository(
                plan.reference.repository,
                registry_host=plan.grant.registry_host,
            )
        except ConflictError:
            warn(
                "Repository was created concurrently, continuing",
                repository=plan.reference.repository,
            )
            plan.repository.exists = True
            return None
        plan.repository.created_name = created_name
        return PushState.CREATED

    def _tag_repository(self, plan: _PushPlan) -> PushState | None:
        if not plan.resource_tags:
            return None
        registry_host = parse_registry_host(plan.grant.registry_host)
        if registry_host is None:
            raise BadRequestError(
                f"Cannot derive repository ARN from registry host "
                f"'{plan.grant.registry_host}'"
            )
        self.tagging_service.tag_resources(
            [registry_host.repository_arn(plan.reference.repository)],
            plan.resource_tags,
        )
        return PushState.TAGGED

    def _push_image(self, plan: _PushPlan) -> PushState:
        self.engine_client.push_image(
            plan.repository_uri,
            plan.tag,
            plan.grant.registry_host,
            plan.grant.credential,
        )
        return PushState.PUSHED
