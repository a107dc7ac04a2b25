"""Custom exceptions for authreq.

This module contains all custom exceptions used throughout the package.
Every error is raised while building or validating a request, never during
execution, so callers can fix the builder and try again.

Authority construction:
    - InvalidAuthorityConfiguration: Malformed URI, tenant or audience input

Request validation:
    - MissingRequiredParameter: A required field is absent (e.g. silent
      request without an account); the caller should switch flows
    - GenericValidationFailure: Any other field-level invariant violation

Usage:
    from authreq.exceptions import InvalidAuthorityConfiguration
"""

from __future__ import annotations

__all__ = [
    "AuthRequestError",
    "GenericValidationFailure",
    "InvalidAuthorityConfiguration",
    "MissingRequiredParameter",
    "RequestValidationError",
]

from typing import Any

from authreq.constants import (
    ERROR_CODE_INVALID_AUTHORITY,
    ERROR_CODE_INVALID_PARAMETER,
    ERROR_CODE_USER_NULL,
)


class AuthRequestError(Exception):
    """Base exception for request building failures.

    Attributes:
        error_code: Machine-readable error code.
        message: Human-readable description.
    """

    error_code: str = "unknown"

    def __init__(self, message: str, *, error_code: str | None = None) -> None:
        """Initialize AuthRequestError.

        Args:
            message: Human-readable description.
            error_code: Overrides the class-level error code.
        """
        if error_code is not None:
            self.error_code = error_code
        self.message = message
        super().__init__(message)

    def _build_error_data(self) -> dict[str, Any]:
        """Build structured data describing the failure."""
        return {}

    @property
    def error_data(self) -> dict[str, Any]:
        """Structured error payload (code, message and extra context)."""
        return {"error_code": self.error_code, "message": self.message, **self._build_error_data()}

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        extra = "".join(f", {key}={value!r}" for key, value in self._build_error_data().items())
        return f"{type(self).__name__}({self.message!r}, error_code={self.error_code!r}{extra})"

    def __str__(self) -> str:
        """Return human-readable string representation."""
        return self.message


# =============================================================================
# Authority Construction
# =============================================================================


class InvalidAuthorityConfiguration(AuthRequestError):
    """Authority input is malformed or contradictory.

    Raised when:
    - Authority URI is not https, has no host or no tenant path segment
    - Cloud instance URI carries a path
    - Tenant is neither a GUID nor a usable tenant name
    - AZURE_AD_MY_ORG audience is used without a tenant
    - An AAD-only input resolves to an ADFS or B2C authority

    Attributes:
        value: The offending input value, if any.
    """

    error_code = ERROR_CODE_INVALID_AUTHORITY

    def __init__(self, message: str, *, value: Any = None) -> None:
        self.value = value
        super().__init__(message)

    def _build_error_data(self) -> dict[str, Any]:
        return {"value": str(self.value)} if self.value is not None else {}


# =============================================================================
# Request Validation
# =============================================================================


class RequestValidationError(AuthRequestError):
    """Base for validation failures tied to a builder field.

    Attributes:
        field: Name of the builder field that failed validation.
    """

    error_code = ERROR_CODE_INVALID_PARAMETER

    def __init__(self, message: str, *, field: str, error_code: str | None = None) -> None:
        self.field = field
        super().__init__(message, error_code=error_code)

    def _build_error_data(self) -> dict[str, Any]:
        return {"field": self.field}


class MissingRequiredParameter(RequestValidationError):
    """A parameter required by the request type was not provided.

    For silent requests this means no account was given: the token cannot
    be obtained without user interaction, so the caller should fall back
    to an interactive flow instead of retrying the same request.
    """

    error_code = ERROR_CODE_USER_NULL
    ui_required: bool = True


class GenericValidationFailure(RequestValidationError):
    """A field holds a value the request type does not accept."""

    ui_required: bool = False
