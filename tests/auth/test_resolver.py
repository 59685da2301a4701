from unittest.mock import MagicMock, call

import pytest

from ecrimage.auth import (
    AccountScoped,
    AuthorizationGrant,
    AuthorizationResolver,
    HostScoped,
    scope_for_reference,
)
from ecrimage.core.exceptions import UnauthorizedError
from ecrimage.reference import ReferenceParser

REGISTRY_ID = "012345678912"
HOST = "012345678912.dkr.ecr.us-east-1.amazonaws.com"
GRANT = AuthorizationGrant(registry_host=HOST)


def create_resolver() -> tuple[MagicMock, AuthorizationResolver]:
    services = MagicMock()
    services.sts.get_account_id.return_value = REGISTRY_ID
    services.ecr.get_authorization_token.return_value = GRANT
    services.ecr.get_authorization_token_by_account_id.return_value = GRANT
    return services, AuthorizationResolver(services.sts, services.ecr)


def test_scope_for_reference():
    with_host = ReferenceParser.parse(f"{HOST}/repo:v1")
    without_host = ReferenceParser.parse("repo:v1")

    assert scope_for_reference(with_host) == HostScoped(host=HOST)
    assert scope_for_reference(with_host, "999999999999") == HostScoped(
        host=HOST
    )
    assert scope_for_reference(without_host) == AccountScoped()
    assert scope_for_reference(without_host, "999999999999") == (
        AccountScoped(account_id="999999999999")
    )


def test_resolve_host_skips_identity_lookup():
    services, resolver = create_resolver()

    grant = resolver.resolve(ReferenceParser.parse(f"{HOST}/repo"))

    assert grant == GRANT
    assert services.mock_calls == [call.ecr.get_authorization_token(HOST)]


def test_resolve_account_looks_up_identity_first():
    services, resolver = create_resolver()

    grant = resolver.resolve(ReferenceParser.parse("repo:v1"))

    assert grant == GRANT
    assert services.mock_calls == [
        call.sts.get_account_id(),
        call.ecr.get_authorization_token_by_account_id(REGISTRY_ID),
    ]


def test_resolve_with_registry_id_skips_identity_lookup():
    services, resolver = create_resolver()

    resolver.resolve(
        ReferenceParser.parse("repo:v1"), registry_id="999999999999"
    )

    assert services.mock_calls == [
        call.ecr.get_authorization_token_by_account_id("999999999999"),
    ]


def test_resolve_identity_failure_propagates_unchanged():
    services, resolver = create_resolver()
    error = UnauthorizedError("expired credentials")
    services.sts.get_account_id.side_effect = error

    with pytest.raises(UnauthorizedError) as exc_info:
        resolver.resolve_scope(AccountScoped())

    assert exc_info.value is error
    services.ecr.get_authorization_token_by_account_id.assert_not_called()


def test_resolve_token_failure_propagates_unchanged():
    services, resolver = create_resolver()
    error = RuntimeError("something failed")
    services.ecr.get_authorization_token.side_effect = error

    with pytest.raises(RuntimeError) as exc_info:
        resolver.resolve_scope(HostScoped(host=HOST))

    assert exc_info.value is error
