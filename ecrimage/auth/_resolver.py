__all__ = ["AuthorizationResolver"]

from typing import Any

from ecrimage.core import get_logger
from ecrimage.reference import ImageReference

from ._models import (
    AccountScoped,
    AuthorizationGrant,
    HostScoped,
    scope_for_reference,
)

logger = get_logger(__name__)


class AuthorizationResolver:
    """Turn a reference into a registry authorization grant.

    Errors raised by the identity or auth service propagate unchanged.
    Nothing is retried or cached.
    """

    identity_service: Any
    auth_service: Any

    def __init__(self, identity_service: Any, auth_service: Any):
        """Initialize.

        Args:
            identity_service:
                Service exposing get_account_id().
            auth_service:
                Service exposing get_authorization_token(registry_host)
                and get_authorization_token_by_account_id(account_id).
        """
        self.identity_service = identity_service
        self.auth_service = auth_service

    def resolve(
        self,
        reference: ImageReference,
        registry_id: str | None = None,
    ) -> AuthorizationGrant:
        return self.resolve_scope(scope_for_reference(reference, registry_id))

    def resolve_scope(
        self, scope: HostScoped | AccountScoped
    ) -> AuthorizationGrant:
        if isinstance(scope, HostScoped):
            logger.debug("resolving authorization", scope=scope.kind)
            return self.auth_service.get_authorization_token(scope.host)

        account_id = scope.account_id
        if account_id is None:
            account_id = self.identity_service.get_account_id()
        logger.debug(
            "resolving authorization", scope=scope.kind, account_id=account_id
        )
        return self.auth_service.get_authorization_token_by_account_id(
            account_id
        )
