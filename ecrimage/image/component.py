from typing import TextIO

from ecrimage.core import Component, Response, operation

from ._models import ImageFilter, ImageTransferItem


class ImageRegistry(Component):
    def __init__(self, **kwargs):
        """Initialize."""
        super().__init__(**kwargs)

    @operation()
    def push(
        self,
        images: list[str],
        resource_tags: dict[str, str] | None = None,
        registry_id: str | None = None,
    ) -> Response[ImageTransferItem]:
        """Push a local image to the registry.

        Args:
            images:
                Positional image arguments. Exactly one image reference
                in the form [<registry-uri>/]<repository>[:<tag>].
            resource_tags: Resource tags to apply to the repository.
            registry_id: Registry account ID. If None, use the caller's.

        Returns:
            Transfer item.
        """
        ...

    @operation()
    def pull(
        self,
        images: list[str],
        registry_id: str | None = None,
    ) -> Response[ImageTransferItem]:
        """Pull an image from the registry.

        Args:
            images:
                Positional image arguments. Exactly one image reference
                in the form [<registry-uri>/]<repository>[:<tag>|@<digest>].
            registry_id: Registry account ID. If None, use the caller's.

        Returns:
            Transfer item.
        """
        ...

    @operation()
    def list_images(
        self,
        image_filter: ImageFilter | None = None,
        out: TextIO | None = None,
    ) -> Response[int]:
        """Print images held in the registry.

        Args:
            image_filter: Repositories and tag status to list.
            out: Stream to write to. If None, standard output.

        Returns:
            Number of image records printed.
        """
        ...

    @operation()
    def close(self) -> Response[None]:
        """Close the registry clients."""
        return Response(result=None)
