"""
Exceptions raised by the quadrilateral detection pipeline.
"""

from typing import Optional


class QuadDetectionError(Exception):
    """Base exception for all detection errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class InvalidImageError(QuadDetectionError):
    """Raised when the input image is missing, empty or cannot be decoded."""

    def __init__(self, reason: str, details: Optional[str] = None) -> None:
        super().__init__(f"Invalid image: {reason}", details=details)
        self.reason = reason


class ConfigurationError(QuadDetectionError, ValueError):
    """Raised when a detection tuning value is out of range."""

    def __init__(self, field: str, value, reason: str) -> None:
        super().__init__(f"Invalid value for {field}: {reason}", details=f"{field}={value!r}")
        self.field = field
        self.value = value
