from __future__ import annotations

from typing import Mapping


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class FormValidationError(ValidationError):
    """Raised when a submitted family form has field errors.

    `errors` maps each field locator to its message so the form can be re-rendered.
    """

    def __init__(self, errors: Mapping, message: str = "Please fix the highlighted fields"):
        super().__init__(message)
        self.errors = dict(errors)


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class ImportFormatError(DomainError):
    """Raised when an import payload cannot be parsed into family records."""
