from unittest.mock import MagicMock

from ecrimage.auth import (
    AuthorizationGrant,
    AuthorizationResolver,
    RegistryCredential,
)
from ecrimage.image import PullOrchestrator, PushOrchestrator

REPOSITORY = "repository"
REPOSITORY_WITH_SLASH = "hi/repo"
TAG = "tag-v0.1.0"
IMAGE = f"{REPOSITORY}:{TAG}"
REGION = "us-west-2"
REGISTRY_ID = "012345678912"
REGISTRY = f"https://{REGISTRY_ID}.dkr.ecr.{REGION}.amazonaws.com"
REPOSITORY_URI = f"{REGISTRY}/{REPOSITORY}"
HOST_URI = "012345678912.dkr.ecr.us-east-1.amazonaws.com"
SHA = (
    "sha256:0b3787ac21ffb4edbd6710e0e60f991d5ded8d8a4f558209ef5987f73db4211a"
)

CREDENTIAL = RegistryCredential(
    username="AWS", password="secret", server_address=REGISTRY
)
GRANT = AuthorizationGrant(registry_host=REGISTRY, credential=CREDENTIAL)


def create_services(repository_exists: bool = False) -> MagicMock:
    """Mocks for every collaborator, sharing one parent.

    The parent's mock_calls records calls across all services in order.
    """
    services = MagicMock()
    services.sts.get_account_id.return_value = REGISTRY_ID
    services.ecr.get_authorization_token.return_value = GRANT
    services.ecr.get_authorization_token_by_account_id.return_value = GRANT
    services.ecr.repository_exists.return_value = repository_exists
    services.ecr.create_repository.return_value = REPOSITORY
    services.tagging.tag_resources.return_value = None
    services.docker.tag_image.return_value = None
    services.docker.push_image.return_value = None
    services.docker.pull_image.return_value = None
    return services


def create_pusher(
    services: MagicMock, with_tagging: bool = True
) -> PushOrchestrator:
    return PushOrchestrator(
        engine_client=services.docker,
        repository_service=services.ecr,
        auth_resolver=AuthorizationResolver(services.sts, services.ecr),
        tagging_service=services.tagging if with_tagging else None,
    )


def create_puller(services: MagicMock) -> PullOrchestrator:
    return PullOrchestrator(
        engine_client=services.docker,
        auth_resolver=AuthorizationResolver(services.sts, services.ecr),
    )
