from __future__ import annotations

import uuid
from typing import Any

from ._operation import Operation
from ._provider import Provider
from ._response import Context, Response
from .exceptions import NotSupportedError


class Component:
    __provider__: Provider
    __type__: str
    __unpack__: bool

    def __init__(
        self,
        **kwargs,
    ):
        self.__unpack__ = kwargs.pop("__unpack__", False)
        self.__type__ = kwargs.pop("__type__", self.__class__.__module__)
        if "__provider__" in kwargs:
            self.__bind__(kwargs.pop("__provider__"))

    def __bind__(
        self,
        provider: Provider | dict | str | None,
    ) -> None:
        if provider is None:
            return
        if isinstance(provider, Provider):
            provider.__component__ = self
            self.__provider__ = provider
            return
        if isinstance(provider, dict):
            provider = dict(provider)
            type = provider.pop("type")
            parameters = provider.pop("parameters", dict())
        else:
            type = provider
            parameters = dict()
        from ._loader import Loader

        module_name = self.__class__.__module__.rsplit(".", 1)[0]
        provider_instance = Loader.load_provider_instance(
            path=f"{module_name}.providers.{type}",
            parameters=parameters,
        )
        self.__bind__(provider=provider_instance)

    def __setup__(self, context: Context | None = None) -> None:
        self.__provider__.__setup__(context=context)

    def __run__(
        self,
        operation: dict | str | Operation | None = None,
        context: dict | Context | None = None,
        **kwargs,
    ) -> Any:
        if not hasattr(self, "__provider__"):
            raise NotSupportedError(str(operation))
        context = self._init_context(context)
        response = self.__provider__.__run__(
            operation=self._convert_operation(operation),
            context=context,
            **kwargs,
        )
        if not isinstance(response, Response):
            return response
        if response.context is None:
            response.context = context
        if self.__unpack__:
            return response.result
        return response

    def __supports__(self, feature: str) -> bool:
        return self.__provider__.__supports__(feature)

    def _convert_operation(
        self,
        operation: dict | str | Operation | None,
    ) -> Operation | None:
        if isinstance(operation, dict):
            return Operation.from_dict(operation)
        elif isinstance(operation, str):
            return Operation(name=operation)
        return operation

    def _init_context(
        self,
        context: dict | Context | None,
    ) -> Context:
        if isinstance(context, dict):
            context = Context.from_dict(context)
        return Context(
            id=context.id if context and context.id else str(uuid.uuid4()),
            data=context.data if context else None,
        )
