__all__ = ["PullOrchestrator"]

from typing import Any

from ecrimage.auth import AuthorizationResolver
from ecrimage.core import get_logger
from ecrimage.core.exceptions import PullStepError, UsageError
from ecrimage.reference import PULL_FORMAT, ReferenceParser

from ._models import ImageTransferItem
from ._push import DEFAULT_TAG

logger = get_logger(__name__)


class PullOrchestrator:
    """Pull an image from the registry into the local engine.

    There is no existence check. Pulling a missing repository is left to
    the registry and the engine to reject.
    """

    engine_client: Any
    auth_resolver: AuthorizationResolver

    def __init__(
        self, engine_client: Any, auth_resolver: AuthorizationResolver
    ):
        self.engine_client = engine_client
        self.auth_resolver = auth_resolver

    def pull(
        self,
        images: list[str],
        registry_id: str | None = None,
    ) -> ImageTransferItem:
        if len(images) != 1:
            raise UsageError(
                f"pull requires exactly 1 image argument, got {len(images)}"
            )
        image = images[0]
        reference = ReferenceParser.parse(image, PULL_FORMAT)

        try:
            grant = self.auth_resolver.resolve(
                reference, registry_id=registry_id
            )
        except Exception as e:
            raise PullStepError("resolve_authorization", e) from e

        repository_uri = f"{grant.registry_host}/{reference.repository}"
        tag_or_digest = reference.tag_or_digest or DEFAULT_TAG
        logger.debug(
            "pulling image",
            repository_uri=repository_uri,
            tag_or_digest=tag_or_digest,
        )
        try:
            self.engine_client.pull_image(
                repository_uri, tag_or_digest, grant.credential
            )
        except Exception as e:
            raise PullStepError("pull_image", e) from e

        return ImageTransferItem(
            image=image,
            repository_uri=repository_uri,
            tag_or_digest=tag_or_digest,
            registry_host=grant.registry_host,
        )
