__all__ = [
    "BaseError",
    "BadRequestError",
    "ConflictError",
    "ForbiddenError",
    "InternalError",
    "LoadError",
    "NotFoundError",
    "NotSupportedError",
    "UnauthorizedError",
    "UsageError",
    "ReferenceParseError",
    "UnsupportedRegistryError",
    "AmbiguousReferenceError",
    "EmptyRepositoryError",
    "InvalidReferenceFormatError",
    "StepError",
    "PushStepError",
    "PullStepError",
    "ListImagesError",
]


class BaseError(Exception):
    status_code: int


class BadRequestError(BaseError):
    status_code = 400


class UnauthorizedError(BaseError):
    status_code = 401


class ForbiddenError(BaseError):
    status_code = 403


class NotFoundError(BaseError):
    status_code = 404


class ConflictError(BaseError):
    status_code = 409


class NotSupportedError(BaseError):
    status_code = 415


class InternalError(Exception):
    status_code = 500


class LoadError(Exception):
    status_code = 500


class UsageError(BadRequestError):
    """Wrong number or shape of command arguments."""


class ReferenceParseError(BadRequestError):
    """Image reference could not be parsed.

    Attributes:
        image: The raw input that failed to parse.
    """

    image: str

    def __init__(self, message: str, image: str = ""):
        super().__init__(message)
        self.image = image


class UnsupportedRegistryError(ReferenceParseError):
    pass


class AmbiguousReferenceError(ReferenceParseError):
    pass


class EmptyRepositoryError(ReferenceParseError):
    pass


class InvalidReferenceFormatError(ReferenceParseError):
    pass


class StepError(BaseError):
    """A named orchestration step failed.

    The original exception is kept on ``error`` and chained as
    ``__cause__``. The status code follows the cause when it has one.

    Attributes:
        step: Name of the step that failed.
        error: Exception raised by the step.
    """

    step: str
    error: Exception

    def __init__(self, step: str, error: Exception):
        super().__init__(f"{step}: {error}")
        self.step = step
        self.error = error
        self.__cause__ = error
        self.status_code = getattr(error, "status_code", 500)


class PushStepError(StepError):
    pass


class PullStepError(StepError):
    pass


class ListImagesError(StepError):
    pass
