"""Base domain exceptions shared by every layer."""

from typing import Any, Optional


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize domain exception.

        Args:
            message: Human readable error message
            error_code: Stable machine readable code (defaults to the class name)
            details: Additional structured context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainException):
    """Raised when user input fails domain validation."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", details)


class ConfigurationError(DomainException):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIGURATION_ERROR", details)


class InfrastructureError(DomainException):
    """Raised when an external system reports a failure."""
