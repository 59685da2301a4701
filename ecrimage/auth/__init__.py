from ._models import (
    AccountScoped,
    AuthorizationGrant,
    AuthorizationScope,
    HostScoped,
    RegistryCredential,
    scope_for_reference,
)
from ._resolver import AuthorizationResolver

__all__ = [
    "AccountScoped",
    "AuthorizationGrant",
    "AuthorizationResolver",
    "AuthorizationScope",
    "HostScoped",
    "RegistryCredential",
    "scope_for_reference",
]
