from __future__ import annotations

from typing import Any

from .data_model import DataModel


class Operation(DataModel):
    """Operation.

    Attributes:
        name: Operation name.
        args: Operation arguments.
    """

    name: str | None = None
    args: dict[str, Any] | None = None

    @staticmethod
    def normalize(
        name: str | None,
        args: dict[str, Any] | None,
    ) -> Operation:
        """Build an operation from bound method arguments.

        The bound instance and arguments left as None are dropped so the
        provider method applies its own defaults.
        """
        if args is None:
            return Operation(name=name)
        return Operation(
            name=name,
            args={
                key: value
                for key, value in args.items()
                if key != "self" and value is not None
            },
        )

    def __str__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in (self.args or {}).items())
        return f"{self.name}({args})"
