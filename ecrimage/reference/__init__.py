from ._models import (
    PULL_FORMAT,
    PUSH_FORMAT,
    ImageReference,
    ReferenceFormat,
    RegistryHost,
)
from ._parser import (
    ReferenceParser,
    parse_image_reference,
    parse_registry_host,
)

__all__ = [
    "ImageReference",
    "PULL_FORMAT",
    "PUSH_FORMAT",
    "ReferenceFormat",
    "ReferenceParser",
    "RegistryHost",
    "parse_image_reference",
    "parse_registry_host",
]
