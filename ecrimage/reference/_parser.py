"""
Image reference parsing.

A reference has the shape ``[host/]repository[:tag|@digest]`` where the
host, when present, must be an ECR registry endpoint.
"""

__all__ = ["ReferenceParser", "parse_image_reference", "parse_registry_host"]

import re

from ecrimage.core import get_logger
from ecrimage.core.exceptions import (
    AmbiguousReferenceError,
    EmptyRepositoryError,
    InvalidReferenceFormatError,
    UnsupportedRegistryError,
)

from ._models import PULL_FORMAT, ImageReference, ReferenceFormat, RegistryHost

logger = get_logger(__name__)

_REGISTRY_HOST = re.compile(
    r"^(?P<registry_id>\d{12})"
    r"\.dkr\.ecr(?P<fips>-fips)?"
    r"\.(?P<region>[a-z]{2}(?:-[a-z]+)+-\d+)"
    r"\.amazonaws\.com(?P<china>\.cn)?$"
)

# Anything that looks like it wants to be a registry endpoint. Such a
# segment is never folded into the repository path.
_HOST_SHAPE = re.compile(r"\.dkr\.|amazonaws\.")

_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://")

_REPOSITORY = re.compile(
    r"^(?:[a-z0-9]+(?:[._-][a-z0-9]+)*/)*[a-z0-9]+(?:[._-][a-z0-9]+)*$"
)
_TAG = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")
_DIGEST = re.compile(r"^[a-z0-9]+(?:[.+_-][a-z0-9]+)*:[a-zA-Z0-9=_-]+$")
_SEPARATOR = re.compile(r"[:@]")


def parse_registry_host(host: str | None) -> RegistryHost | None:
    """Recognize an ECR registry host.

    A leading URL scheme and trailing slashes are ignored.

    Args:
        host: Host string, e.g. 012345678912.dkr.ecr.us-east-1.amazonaws.com

    Returns:
        Parsed host, or None when the host is not an ECR endpoint.
    """
    if not host:
        return None
    match = _REGISTRY_HOST.match(_SCHEME.sub("", host).rstrip("/"))
    if match is None:
        return None
    return RegistryHost(
        registry_id=match.group("registry_id"),
        region=match.group("region"),
        fips=match.group("fips") is not None,
        china=match.group("china") is not None,
    )


class ReferenceParser:
    @staticmethod
    def parse(
        image: str,
        reference_format: ReferenceFormat = PULL_FORMAT,
    ) -> ImageReference:
        """Parse an image reference.

        Args:
            image: Raw image reference supplied by the user.
            reference_format: Grammar the reference must follow.

        Returns:
            Parsed image reference.

        Raises:
            UnsupportedRegistryError:
                The host prefix is not a recognized ECR endpoint.
            AmbiguousReferenceError: Both a tag and a digest are given.
            EmptyRepositoryError: No repository name is left.
            InvalidReferenceFormatError:
                The reference does not follow the format.
        """
        registry_host = None
        remainder = image
        head, slash, rest = image.partition("/")
        if _HOST_SHAPE.search(head):
            if _REGISTRY_HOST.match(head) is None:
                raise UnsupportedRegistryError(
                    f"Unsupported registry endpoint '{head}'", image
                )
            if not slash:
                raise EmptyRepositoryError(
                    f"Empty repository name in '{image}'", image
                )
            registry_host = head
            remainder = rest

        at = remainder.find("@")
        if at >= 0 and ":" in remainder[:at]:
            raise AmbiguousReferenceError(
                f"Ambiguous reference '{image}', "
                "tag and digest both specified",
                image,
            )

        match = _SEPARATOR.search(remainder)
        index = match.start() if match else len(remainder)
        repository = remainder[:index]
        if not repository:
            raise EmptyRepositoryError(
                f"Empty repository name in '{image}'", image
            )
        if not _REPOSITORY.match(repository):
            raise ReferenceParser._format_error(image, reference_format)

        tag = None
        digest = None
        if match:
            separator = remainder[index]
            suffix = remainder[index + 1 :]
            if separator not in reference_format.separators:
                raise ReferenceParser._format_error(image, reference_format)
            if separator == "@":
                if not _DIGEST.match(suffix):
                    raise ReferenceParser._format_error(
                        image, reference_format
                    )
                digest = suffix
            else:
                if not _TAG.match(suffix):
                    raise ReferenceParser._format_error(
                        image, reference_format
                    )
                tag = suffix

        reference = ImageReference(
            registry_host=registry_host,
            repository=repository,
            tag=tag,
            digest=digest,
        )
        logger.debug(
            "parsed image reference",
            image=image,
            registry_host=registry_host,
            repository=repository,
            tag=tag,
            digest=digest,
        )
        return reference

    @staticmethod
    def _format_error(
        image: str, reference_format: ReferenceFormat
    ) -> InvalidReferenceFormatError:
        return InvalidReferenceFormatError(
            f"Please specify the image name in the correct format "
            f"{reference_format.description}, got '{image}'",
            image,
        )


def parse_image_reference(
    image: str,
    reference_format: ReferenceFormat = PULL_FORMAT,
) -> ImageReference:
    return ReferenceParser.parse(image, reference_format)
