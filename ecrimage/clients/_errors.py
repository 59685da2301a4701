from contextlib import contextmanager
from typing import Iterator

from botocore.exceptions import ClientError

from ecrimage.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)

_ERROR_CODES = {
    "RepositoryNotFoundException": NotFoundError,
    "ImageNotFoundException": NotFoundError,
    "RepositoryAlreadyExistsException": ConflictError,
    "AccessDenied": ForbiddenError,
    "AccessDeniedException": ForbiddenError,
    "UnrecognizedClientException": UnauthorizedError,
    "InvalidClientTokenId": UnauthorizedError,
    "ExpiredToken": UnauthorizedError,
    "ExpiredTokenException": UnauthorizedError,
    "InvalidParameterException": BadRequestError,
    "InvalidParameterValueException": BadRequestError,
}


def get_error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "")


@contextmanager
def translate_client_errors() -> Iterator[None]:
    """Re-raise known botocore error codes as core exceptions.

    Unknown codes propagate as the original ClientError.
    """
    try:
        yield
    except ClientError as e:
        error_type = _ERROR_CODES.get(get_error_code(e))
        if error_type is None:
            raise
        message = e.response.get("Error", {}).get("Message") or str(e)
        raise error_type(message) from e
