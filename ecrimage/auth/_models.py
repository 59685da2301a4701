from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from ecrimage.core import FrozenDataModel
from ecrimage.reference import ImageReference


class HostScoped(FrozenDataModel):
    """Authorize against an explicit registry host."""

    kind: Literal["host"] = "host"
    host: str


class AccountScoped(FrozenDataModel):
    """Authorize against the default registry of an account.

    Attributes:
        account_id: Registry account. None means the caller's account.
    """

    kind: Literal["account"] = "account"
    account_id: str | None = None


AuthorizationScope = Annotated[
    Union[HostScoped, AccountScoped], Field(discriminator="kind")
]


def scope_for_reference(
    reference: ImageReference,
    registry_id: str | None = None,
) -> HostScoped | AccountScoped:
    """Pick the authorization scope for a parsed reference.

    An explicit host in the reference takes precedence over registry_id.
    """
    if reference.registry_host:
        return HostScoped(host=reference.registry_host)
    return AccountScoped(account_id=registry_id)


class RegistryCredential(FrozenDataModel):
    """Registry login material.

    Attributes:
        username: Registry user name.
        password: Registry password or token.
        server_address: Registry endpoint the credential is for.
    """

    username: str = ""
    password: str = ""
    server_address: str = ""

    def to_auth_config(self) -> dict[str, str]:
        auth_config = dict(username=self.username, password=self.password)
        if self.server_address:
            auth_config["serveraddress"] = self.server_address
        return auth_config

    def __repr__(self) -> str:
        return (
            f"RegistryCredential(username={self.username!r}, "
            f"server_address={self.server_address!r})"
        )


class AuthorizationGrant(FrozenDataModel):
    """Credential material for one registry interaction.

    Attributes:
        registry_host: Canonical registry host the grant is valid for.
        credential: Login material handed to the engine client.
        expires_at: Expiry in seconds since epoch, if known.
    """

    registry_host: str
    credential: RegistryCredential = Field(default_factory=RegistryCredential)
    expires_at: float | None = None
