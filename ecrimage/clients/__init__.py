from .docker_engine import DockerEngineClient
from .ecr import EcrClient
from .sts import StsClient
from .tagging import TaggingClient

__all__ = [
    "DockerEngineClient",
    "EcrClient",
    "StsClient",
    "TaggingClient",
]
