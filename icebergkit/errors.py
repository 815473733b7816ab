"""Error types raised throughout the package."""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Broad category of a failure."""

    UNEXPECTED = "Unexpected"
    DATA_INVALID = "DataInvalid"
    FEATURE_UNSUPPORTED = "FeatureUnsupported"

    def __str__(self) -> str:
        return self.value


class IcebergError(Exception):
    """Base class of every error raised by the package."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value}, message={self.message!r})"


class DataInvalidError(IcebergError):
    """Input data or metadata is malformed or inconsistent."""

    kind = ErrorKind.DATA_INVALID


class FeatureUnsupportedError(IcebergError):
    """The requested operation is not supported."""

    kind = ErrorKind.FEATURE_UNSUPPORTED


class UnexpectedError(IcebergError):
    """An internal condition that should not happen."""

    kind = ErrorKind.UNEXPECTED