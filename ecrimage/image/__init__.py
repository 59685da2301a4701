from ._list import ImageLister, format_image_row
from ._models import (
    ImageDetail,
    ImageFilter,
    ImageTransferItem,
    PushState,
    RepositoryState,
    TagStatus,
)
from ._pull import PullOrchestrator
from ._push import PushOrchestrator
from .component import ImageRegistry

__all__ = [
    "ImageDetail",
    "ImageFilter",
    "ImageLister",
    "ImageRegistry",
    "ImageTransferItem",
    "PullOrchestrator",
    "PushOrchestrator",
    "PushState",
    "RepositoryState",
    "TagStatus",
    "format_image_row",
]
