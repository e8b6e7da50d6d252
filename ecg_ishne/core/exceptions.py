"""Custom exceptions for ECG ISHNE system."""

from typing import Optional


class ECGISHNEError(Exception):
    """Base exception for ECG ISHNE system."""
    pass


class ConfigurationError(ECGISHNEError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(ECGISHNEError, ValueError):
    """Raised when a header field or package structure is rejected."""
    pass


class ParseError(ECGISHNEError, ValueError):
    """Raised when a date or time value cannot be parsed."""
    pass


class PackageIOError(ECGISHNEError, OSError):
    """Raised when reading raw data or writing a package fails.

    Attributes:
        phase: Failing step, one of ``"read"``, ``"create"`` or ``"write"``
        path: File the operation was acting on
    """

    def __init__(self, phase: str, path: str, cause: Optional[BaseException] = None):
        self.phase = phase
        self.path = str(path)
        self.cause = cause
        message = f"{phase} failed for {self.path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ProtocolError(ECGISHNEError):
    """Raised when an ISHNE file violates the format."""
    pass


class CRCError(ProtocolError):
    """Raised when header checksum validation fails."""
    pass


class PacketParseError(ProtocolError):
    """Raised when an ISHNE file cannot be parsed."""
    pass
