"""Service-level error taxonomy. Each error carries a stable kind, a message and an HTTP status."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    kind = "InternalError"
    status_code = 500
    default_message = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentialsError(ServiceError):
    """Raised for unknown usernames and wrong passwords alike."""

    kind = "InvalidCredentials"
    status_code = 401
    default_message = "Invalid username or password."


class NoSessionError(ServiceError):
    kind = "NoSession"
    status_code = 401
    default_message = "Not authenticated."


class InvalidSessionError(ServiceError):
    kind = "InvalidSession"
    status_code = 401
    default_message = "Invalid or expired session."


class ForbiddenError(ServiceError):
    kind = "Forbidden"
    status_code = 403
    default_message = "Admin access required."


class MissingFieldsError(ServiceError):
    kind = "MissingFields"
    status_code = 400
    default_message = "Required fields are missing."


class InvalidPayloadError(ServiceError):
    kind = "InvalidPayload"
    status_code = 400
    default_message = "Invalid request payload."


class DuplicateUsernameError(ServiceError):
    kind = "DuplicateUsername"
    status_code = 409
    default_message = "Username already exists."


class NotFoundError(ServiceError):
    kind = "NotFound"
    status_code = 404
    default_message = "Not found."


class ProtectedUserError(ServiceError):
    kind = "ProtectedUser"
    status_code = 400
    default_message = "The admin account cannot be deleted."


class InternalError(ServiceError):
    """Store or unexpected failure. The message never includes store details."""


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Log store failures raised inside the block and re-raise them as InternalError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Store failure during %s", operation)
        raise InternalError() from e
