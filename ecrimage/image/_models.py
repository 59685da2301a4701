from enum import Enum

from ecrimage.core import DataModel


class PushState(str, Enum):
    INIT = "init"
    AUTH_RESOLVED = "auth_resolved"
    RETAGGED = "retagged"
    EXISTENCE_CHECKED = "existence_checked"
    CREATED = "created"
    TAGGED = "tagged"
    PUSHED = "pushed"


class TagStatus(str, Enum):
    ANY = "ANY"
    TAGGED = "TAGGED"
    UNTAGGED = "UNTAGGED"


class RepositoryState(DataModel):
    """Existence and creation outcome of a registry repository.

    Attributes:
        exists: Repository existed before the push.
        created_name: Name returned by the create call, if one was made.
    """

    exists: bool = False
    created_name: str | None = None


class ImageTransferItem(DataModel):
    """Result of a push or pull.

    Attributes:
        image: Image reference as supplied by the user.
        repository_uri: Repository URI the engine transferred to or from.
        tag_or_digest: Tag or digest transferred.
        registry_host: Registry host the grant was issued for.
        states: Push states reached, in order.
        repository: Repository state observed during a push.
    """

    image: str
    repository_uri: str
    tag_or_digest: str | None = None
    registry_host: str
    states: list[PushState] = []
    repository: RepositoryState | None = None


class ImageFilter(DataModel):
    """Image listing filter.

    Attributes:
        repository_names: Repositories to list. Empty lists all.
        tag_status: Tagged, untagged or any images.
        registry_id: Registry account. None uses the caller's account.
    """

    repository_names: list[str] = []
    tag_status: TagStatus = TagStatus.ANY
    registry_id: str | None = None


class ImageDetail(DataModel):
    """Image record held in the registry.

    Attributes:
        repository_name: Repository the image belongs to.
        digest: Image digest.
        tags: Image tags.
        pushed_at: Push time in seconds since epoch.
        size_bytes: Image size in bytes.
    """

    repository_name: str
    digest: str
    tags: list[str] = []
    pushed_at: float | None = None
    size_bytes: int | None = None
