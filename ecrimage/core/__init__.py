from ._component import Component
from ._decorators import operation
from ._loader import Loader
from ._log_helper import configure_logging, get_logger, warn
from ._operation import Operation
from ._provider import Provider
from ._response import Context, Response
from .data_model import DataModel, FrozenDataModel

__all__ = [
    "Component",
    "Context",
    "DataModel",
    "FrozenDataModel",
    "Loader",
    "Operation",
    "Provider",
    "Response",
    "configure_logging",
    "get_logger",
    "operation",
    "warn",
]
