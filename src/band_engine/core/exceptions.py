"""
Custom Exception Classes

Application-specific exception classes raised at the edges of the band
engine: configuration loading, reference table loading and input files.
Answer evaluation and band scoring never raise on user input.
"""

from typing import Optional, Any, Dict


class BandEngineException(Exception):
    """Base exception class for all band engine errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(BandEngineException):
    """Raised when there's an issue with configuration setup or validation."""
    pass


class ReferenceDataError(BandEngineException):
    """Raised when the synonym/variation reference tables cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, kwargs)
        self.path = path


class ValidationError(BandEngineException):
    """Raised when a question-set file fails validation."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 invalid_value: Optional[Any] = None, **kwargs):
        super().__init__(message, kwargs)
        self.field_name = field_name
        self.invalid_value = invalid_value
