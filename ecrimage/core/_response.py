from __future__ import annotations

from typing import Any, Generic, TypeVar

from .data_model import DataModel

T = TypeVar("T")


class Context(DataModel):
    """Operation context.

    Attributes:
        id: Operation id, generated per call when not supplied.
        data: Caller data carried alongside the operation.
    """

    id: str | None = None
    data: dict[str, Any] | None = None


class Response(DataModel, Generic[T]):
    """Operation response.

    Attributes:
        result: Value produced by the provider.
        context: Context of the operation that produced the result.
    """

    result: T
    context: Context | None = None
