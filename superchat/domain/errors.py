# superchat/domain/errors.py
"""Typed failures raised by interactors and gateways.

Every error carries the HTTP status it maps to and the message that is safe to
show to a client. The API layer turns them into the response envelope.
"""


class DomainError(Exception):
    status_code: int = 500
    kind: str = "Error"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def is_server_fault(self) -> bool:
        return self.status_code >= 500


class InvalidArgumentError(DomainError):
    status_code = 400
    kind = "InvalidArgument"
    default_message = "Invalid request"


class UnauthorizedError(DomainError):
    status_code = 401
    kind = "Unauthorized"
    default_message = "Could not validate credentials"


class ForbiddenError(DomainError):
    status_code = 403
    kind = "Forbidden"
    default_message = "You are not allowed to perform this action"


class NotFoundError(DomainError):
    status_code = 404
    kind = "NotFound"
    default_message = "Resource not found"


class ConflictError(DomainError):
    status_code = 409
    kind = "Conflict"
    default_message = "Resource already exists"


class StorageFailureError(DomainError):
    status_code = 500
    kind = "StorageFailure"
    default_message = "Internal server error"


class TransientStorageError(StorageFailureError):
    """Storage conflict that may succeed if the transaction is replayed."""


class StorageTimeoutError(DomainError):
    status_code = 504
    kind = "Timeout"
    default_message = "The request timed out"
