__all__ = ["TaggingClient"]

from typing import Any

from ecrimage.core import get_logger
from ecrimage.core.exceptions import InternalError

from ._errors import translate_client_errors

logger = get_logger(__name__)


class TaggingClient:
    """Resource Groups Tagging API adapter."""

    _client: Any

    def __init__(
        self,
        session: Any,
        region: str | None = None,
        nparams: dict[str, Any] | None = None,
        client: Any | None = None,
    ):
        self._client = client or session.client(
            "resourcegroupstaggingapi",
            region_name=region,
            **(nparams or dict()),
        )

    def tag_resources(
        self, resource_arns: list[str], tags: dict[str, str]
    ) -> None:
        with translate_client_errors():
            response = self._client.tag_resources(
                ResourceARNList=list(resource_arns), Tags=dict(tags)
            )
        failed = response.get("FailedResourcesMap") or {}
        if failed:
            messages = [
                f"{arn}: {info.get('ErrorMessage', info.get('ErrorCode'))}"
                for arn, info in failed.items()
            ]
            raise InternalError(
                "Failed to tag resources: " + "; ".join(messages)
            )
        logger.debug("tagged resources", resources=list(resource_arns))
