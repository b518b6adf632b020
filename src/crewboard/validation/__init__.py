"""Validation module for checking board input before a pass."""

from crewboard.validation.validator import (
    InputValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
)

__all__ = [
    "InputValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
]
