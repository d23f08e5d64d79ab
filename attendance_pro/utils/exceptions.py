"""
Custom Exceptions Module.

All errors raised by Attendance Pro derive from AttendanceProError so a
caller can catch the whole family at once. Data problems in extracted
records are never exceptions: missing fields are defaulted by the
calculator and gateway failures become a fallback uncertainty.

Exception Hierarchy:
    AttendanceProError (base)
    ├── GatewayError
    │   ├── GatewayConfigurationError
    │   ├── GatewayRequestError
    │   └── GatewayResponseError
    ├── InputError
    │   └── ImageEncodingError
    ├── SessionError
    │   ├── ExtractionInProgressError
    │   └── RecordUpdateError
    └── OutputError
        └── ExportError
"""


class AttendanceProError(Exception):
    """
    Base exception for all Attendance Pro errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# GATEWAY ERRORS
# =============================================================================

class GatewayError(AttendanceProError):
    """Base exception for extraction gateway errors."""
    pass


class GatewayConfigurationError(GatewayError):
    """Raised when the gateway cannot be constructed (e.g. no API key)."""

    def __init__(self, setting: str, reason: str = None):
        message = f"Extraction gateway is not configured: {setting}"
        details = {"setting": setting, "reason": reason}
        super().__init__(message, details)


class GatewayRequestError(GatewayError):
    """Raised when the HTTP call to the model service fails."""

    def __init__(self, endpoint: str, reason: str = None, status_code: int = None):
        message = f"Extraction request failed: {endpoint}"
        details = {"endpoint": endpoint, "reason": reason, "status_code": status_code}
        super().__init__(message, details)


class GatewayResponseError(GatewayError):
    """Raised when the model service answers with an unusable payload."""

    def __init__(self, reason: str = None):
        message = "Extraction response could not be parsed"
        details = {"reason": reason}
        super().__init__(message, details)


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(AttendanceProError):
    """Base exception for input handling errors."""
    pass


class ImageEncodingError(InputError):
    """Raised when an image cannot be read or encoded."""

    def __init__(self, source: str, reason: str = None):
        message = f"Could not encode image: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# SESSION ERRORS
# =============================================================================

class SessionError(AttendanceProError):
    """Base exception for session controller errors."""
    pass


class ExtractionInProgressError(SessionError):
    """Raised when an extraction is requested while another is in flight."""

    def __init__(self):
        super().__init__("An extraction is already in progress")


class RecordUpdateError(SessionError):
    """Raised when an edit names a field that cannot be edited."""

    def __init__(self, field: str, allowed: list):
        message = f"Field cannot be edited: '{field}'"
        details = {"field": field, "allowed": allowed}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(AttendanceProError):
    """Base exception for output handling errors."""
    pass


class ExportError(OutputError):
    """Raised when a CSV or Excel export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'AttendanceProError',
    'GatewayError',
    'GatewayConfigurationError',
    'GatewayRequestError',
    'GatewayResponseError',
    'InputError',
    'ImageEncodingError',
    'SessionError',
    'ExtractionInProgressError',
    'RecordUpdateError',
    'OutputError',
    'ExportError',
]
