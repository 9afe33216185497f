"""
Operation errors.

Guards return an OperationError describing why an operation was rejected;
the service layer turns it into a TierPassError subclass after rolling back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal["unauthorized", "invalid_argument", "precondition_failed"]


@dataclass(frozen=True)
class OperationError:
    """A rejected operation: kind, stable code and a readable message."""

    kind: ErrorKind
    code: str
    message: str
    field: str | None = None


def unauthorized(code: str, message: str) -> OperationError:
    return OperationError(kind="unauthorized", code=code, message=message)


def invalid_argument(code: str, message: str, field: str | None = None) -> OperationError:
    return OperationError(kind="invalid_argument", code=code, message=message, field=field)


def precondition_failed(code: str, message: str) -> OperationError:
    return OperationError(kind="precondition_failed", code=code, message=message)


# --- Exceptions ---


class TierPassError(Exception):
    """Base class for rejected operations."""

    kind: ErrorKind

    def __init__(self, error: OperationError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message


class UnauthorizedError(TierPassError):
    kind: ErrorKind = "unauthorized"


class InvalidArgumentError(TierPassError):
    kind: ErrorKind = "invalid_argument"


class PreconditionFailedError(TierPassError):
    kind: ErrorKind = "precondition_failed"


_EXCEPTIONS: dict[ErrorKind, type[TierPassError]] = {
    "unauthorized": UnauthorizedError,
    "invalid_argument": InvalidArgumentError,
    "precondition_failed": PreconditionFailedError,
}


def to_exception(error: OperationError) -> TierPassError:
    """Build the exception matching the error kind."""
    return _EXCEPTIONS[error.kind](error)


class PlatformNotInitializedError(LookupError):
    """Raised by state repositories when the platform row does not exist yet."""
