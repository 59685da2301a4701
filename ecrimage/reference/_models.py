from __future__ import annotations

from pydantic import model_validator

from ecrimage.core import FrozenDataModel


class ImageReference(FrozenDataModel):
    """Parsed image reference.

    Attributes:
        registry_host:
            Registry host, set only when the input carried an
            explicit registry prefix.
        repository: Repository path, may contain "/".
        tag: Image tag.
        digest: Image digest in the form algorithm:hex.
    """

    registry_host: str | None = None
    repository: str
    tag: str | None = None
    digest: str | None = None

    @model_validator(mode="after")
    def _check_invariants(self) -> ImageReference:
        if not self.repository:
            raise ValueError("repository must not be empty")
        if self.tag is not None and self.digest is not None:
            raise ValueError("tag and digest are mutually exclusive")
        return self

    @property
    def tag_or_digest(self) -> str | None:
        return self.tag if self.tag is not None else self.digest

    def __str__(self) -> str:
        image = self.repository
        if self.registry_host:
            image = f"{self.registry_host}/{image}"
        if self.tag is not None:
            image += f":{self.tag}"
        elif self.digest is not None:
            image += f"@{self.digest}"
        return image


class RegistryHost(FrozenDataModel):
    """Recognized ECR registry host.

    Attributes:
        registry_id: AWS account ID that owns the registry.
        region: AWS region of the registry.
        fips: Host uses the FIPS endpoint family.
        china: Host uses the China domain suffix.
    """

    registry_id: str
    region: str
    fips: bool = False
    china: bool = False

    @property
    def host(self) -> str:
        service = "ecr-fips" if self.fips else "ecr"
        suffix = "amazonaws.com.cn" if self.china else "amazonaws.com"
        return f"{self.registry_id}.dkr.{service}.{self.region}.{suffix}"

    @property
    def partition(self) -> str:
        if self.china:
            return "aws-cn"
        if self.region.startswith("us-gov-"):
            return "aws-us-gov"
        return "aws"

    def repository_arn(self, repository: str) -> str:
        return (
            f"arn:{self.partition}:ecr:{self.region}:{self.registry_id}"
            f":repository/{repository}"
        )


class ReferenceFormat(FrozenDataModel):
    """Accepted reference grammar.

    Attributes:
        separators: Characters allowed to follow the repository.
        description: Format shown to users in error messages.
    """

    separators: str
    description: str


PUSH_FORMAT = ReferenceFormat(
    separators=":",
    description="[<registry-uri>/]<repository>[:<tag>]",
)

PULL_FORMAT = ReferenceFormat(
    separators=":@",
    description="[<registry-uri>/]<repository>[:<tag>|@<digest>]",
)
