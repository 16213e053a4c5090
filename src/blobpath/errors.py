"""Domain error kinds and classification of storage backend failures."""

from __future__ import annotations

from enum import Enum

# Backend status codes with a dedicated meaning
STATUS_EXPIRED_TOKEN = 400
STATUS_NOT_FOUND = 404
STATUS_MOVED_PERMANENTLY = 301


class ErrorKind(Enum):
    """Closed set of failures surfaced to callers."""

    UNKNOWN = "Something unexpected happened."
    EXPIRED_TOKEN = "The provided token has expired."
    OBJECT_DOES_NOT_EXIST = "No such file or directory."
    OBJECT_ALREADY_EXISTS = "File exists."
    NOT_A_DIRECTORY = "Not a directory."
    INVALID_PATH = "Not a valid path."

    @property
    def message(self) -> str:
        """Human-readable description of the error kind."""
        return self.value


class Operation(Enum):
    """Storage operations whose failures are classified."""

    HEAD_OBJECT = "head_object"
    GET_METADATA = "get_metadata"
    GET_OBJECT = "get_object"
    PUT_OBJECT = "put_object"
    LIST_OBJECTS = "list_objects"

    @property
    def is_existence_check(self) -> bool:
        return self in (Operation.HEAD_OBJECT, Operation.GET_METADATA)


class BlobPathError(Exception):
    """Raised when a path operation fails.

    Attributes:
        kind: Classified failure kind.
        status_code: Backend response status, if the failure came from one.
        path: Path the operation was addressing, if known.
    """

    def __init__(
        self,
        kind: ErrorKind,
        *,
        status_code: int | None = None,
        path: str | None = None,
        detail: str | None = None,
    ) -> None:
        message = kind.message
        if detail:
            message = f"{message} {detail}"
        if path:
            message = f"{message} path:{path}"
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.path = path


def classify_error(status: int | ErrorKind | None, operation: Operation) -> ErrorKind:
    """Map a backend response status to an ErrorKind.

    Not-found and redirect responses are only authoritative for existence
    and metadata checks; for listings and writes they classify as UNKNOWN.

    Args:
        status: HTTP status of the failed response, None for a request-level
            failure, or an ErrorKind for a condition detected locally.
        operation: The operation that was attempted.

    Returns:
        Exactly one ErrorKind. Never raises.
    """
    if isinstance(status, ErrorKind):
        return status
    if status == STATUS_EXPIRED_TOKEN:
        return ErrorKind.EXPIRED_TOKEN
    if status in (STATUS_NOT_FOUND, STATUS_MOVED_PERMANENTLY):
        if operation.is_existence_check:
            return ErrorKind.OBJECT_DOES_NOT_EXIST
        return ErrorKind.UNKNOWN
    return ErrorKind.UNKNOWN
