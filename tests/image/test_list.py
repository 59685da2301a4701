import io
from unittest.mock import MagicMock

import pytest

from ecrimage.core.exceptions import ForbiddenError, ListImagesError
from ecrimage.image import (
    ImageDetail,
    ImageFilter,
    ImageLister,
    TagStatus,
    format_image_row,
)
from ecrimage.image._list import HEADER

from ._services import SHA

NOW = 1_700_000_000.0


def create_detail(repository: str = "repository", **kwargs) -> ImageDetail:
    return ImageDetail(
        repository_name=repository,
        digest=kwargs.pop("digest", SHA),
        **kwargs,
    )


def test_format_image_row():
    detail = create_detail(
        tags=["v1", "latest"],
        pushed_at=NOW - 3 * 24 * 3600,
        size_bytes=52_300_000,
    )

    row = format_image_row(detail, now=NOW)

    assert row.split() == [
        "repository",
        "v1,latest",
        SHA,
        "3",
        "days",
        "ago",
        "52.3",
        "MB",
    ]
    assert row.index("v1,latest") == HEADER.index("TAG")
    assert row.index(SHA) == HEADER.index("IMAGE DIGEST")


def test_format_image_row_untagged():
    row = format_image_row(create_detail(), now=NOW)

    assert row.split() == ["repository", "<none>", SHA, "-", "-"]


def test_list_images_streams_pages():
    service = MagicMock()
    consumed = []

    def pages():
        consumed.append(1)
        yield [create_detail("a", tags=["v1"]), create_detail("a")]
        consumed.append(2)
        yield [create_detail("b", tags=["v2"])]

    service.get_images.return_value = pages()
    image_filter = ImageFilter(
        repository_names=["a", "b"], tag_status=TagStatus.TAGGED
    )
    out = io.StringIO()

    count = ImageLister(service).list_images(image_filter, out=out)

    service.get_images.assert_called_once_with(image_filter)
    assert count == 3
    assert consumed == [1, 2]
    lines = out.getvalue().splitlines()
    assert lines[0] == HEADER.rstrip()
    assert [line.split()[0] for line in lines[1:]] == ["a", "a", "b"]
    assert lines[2].split()[1] == "<none>"


def test_list_images_empty():
    service = MagicMock()
    service.get_images.return_value = iter([])
    out = io.StringIO()

    count = ImageLister(service).list_images(ImageFilter(), out=out)

    assert count == 0
    assert out.getvalue() == HEADER.rstrip() + "\n"


def test_list_images_failure_keeps_printed_rows():
    service = MagicMock()
    error = ForbiddenError("denied")

    def pages():
        yield [create_detail("a", tags=["v1"])]
        raise error

    service.get_images.return_value = pages()
    out = io.StringIO()

    with pytest.raises(ListImagesError) as exc_info:
        ImageLister(service).list_images(ImageFilter(), out=out)

    assert exc_info.value.error is error
    assert exc_info.value.status_code == 403
    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[1].startswith("a ")
