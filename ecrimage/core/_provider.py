from typing import Any

from ._response import Context
from ._operation import Operation
from .exceptions import NotSupportedError


class Provider:
    __component__: Any
    __type__: str

    def __init__(self, **kwargs):
        self.__type__ = kwargs.pop("__type__", self.__class__.__module__)
        for key, value in kwargs.items():
            setattr(self, key, value)

    def __setup__(self, context: Context | None = None) -> None:
        pass

    def __run__(
        self,
        operation: Operation | None = None,
        context: Context | None = None,
        **kwargs,
    ) -> Any:
        if operation and operation.name:
            func = getattr(self, operation.name, None)
            if func and callable(func):
                self.__setup__(context=context)
                return func(**(operation.args or {}))
        raise NotSupportedError(str(operation))

    def __supports__(self, feature: str) -> bool:
        return callable(getattr(self, feature, None))
