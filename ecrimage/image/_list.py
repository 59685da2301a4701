__all__ = ["ImageLister", "format_image_row"]

import sys
from typing import Any, TextIO

from ecrimage.core.exceptions import ListImagesError
from ecrimage.core.time import Time, humanize_size

from ._models import ImageDetail, ImageFilter

_ROW = "{:<32} {:<24} {:<72} {:<20} {}"

HEADER = _ROW.format(
    "REPOSITORY NAME", "TAG", "IMAGE DIGEST", "PUSHED AT", "SIZE"
)


def format_image_row(detail: ImageDetail, now: float | None = None) -> str:
    tags = ",".join(detail.tags) if detail.tags else "<none>"
    pushed_at = (
        Time.humanize_since(detail.pushed_at, now=now)
        if detail.pushed_at is not None
        else "-"
    )
    size = (
        humanize_size(detail.size_bytes)
        if detail.size_bytes is not None
        else "-"
    )
    return _ROW.format(
        detail.repository_name, tags, detail.digest, pushed_at, size
    ).rstrip()


class ImageLister:
    """Print registry images page by page.

    Pages are consumed as the registry service yields them, so at most
    one page is held in memory. Lines already written stay written when
    a later page fails.
    """

    registry_service: Any

    def __init__(self, registry_service: Any):
        self.registry_service = registry_service

    def list_images(
        self,
        image_filter: ImageFilter,
        out: TextIO | None = None,
    ) -> int:
        out = out or sys.stdout
        out.write(HEADER.rstrip() + "\n")
        count = 0
        try:
            for page in self.registry_service.get_images(image_filter):
                for detail in page:
                    out.write(format_image_row(detail) + "\n")
                    count += 1
                out.flush()
        except Exception as e:
            raise ListImagesError("list_images", e) from e
        return count
