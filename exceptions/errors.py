"""
Custom exception classes for the application.

Every handled failure is an AppError so routes can turn it into
the standard error response body.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "CSV_PARSE_ERROR")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class BadRequestError(AppError):
    """Request cannot be processed as sent (400)."""

    def __init__(
        self,
        message: str,
        code: str = "BAD_REQUEST",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details
        )


class AuthenticationError(AppError):
    """Missing or rejected credentials (401)."""

    def __init__(
        self,
        message: str,
        code: str = "UNAUTHORIZED",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=401,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 503
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=status_code,
            details={"service": service, **(details or {})}
        )


# ===================
# CSV ERRORS
# ===================

class CSVParseError(ValidationError):
    """CSV file could not be parsed."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="CSV_PARSE_ERROR",
            message=f"Error parsing CSV: {message}",
            details=details
        )


class InvalidFileTypeError(ValidationError):
    """Uploaded file is not a CSV."""

    def __init__(self, filename: Optional[str]):
        super().__init__(
            code="INVALID_FILE_TYPE",
            message="Please upload a CSV file",
            details={"filename": filename}
        )


# ===================
# UPLOAD REQUEST ERRORS
# ===================

class MissingUploadDataError(BadRequestError):
    """Rows or mapping absent from the request."""

    def __init__(self):
        super().__init__(
            code="MISSING_UPLOAD_DATA",
            message="Missing required data or mapping"
        )


class IncompleteMappingError(BadRequestError):
    """One or more roles not bound to a column."""

    def __init__(self, missing_roles: list[str]):
        super().__init__(
            code="INCOMPLETE_MAPPING",
            message="Please map all required fields",
            details={"missing": missing_roles}
        )


class NoValidProductsError(BadRequestError):
    """Every row failed validation."""

    def __init__(self, errors: Optional[list[str]] = None):
        super().__init__(
            code="NO_VALID_PRODUCTS",
            message="No valid products to process",
            details={"errors": errors or []}
        )


class MissingCredentialError(AuthenticationError):
    """No bearer token supplied."""

    def __init__(self):
        super().__init__(
            code="MISSING_ACCESS_TOKEN",
            message="No access token provided"
        )


class MissingRefreshTokenError(BadRequestError):
    """Token exchange requested without a refresh token."""

    def __init__(self):
        super().__init__(
            code="MISSING_REFRESH_TOKEN",
            message="Refresh token is required"
        )


# ===================
# SHIPHERO ERRORS
# ===================

class ShipHeroError(ExternalServiceError):
    """
    A single ShipHero call failed.

    The message is the one-line reason shown to the user for that row.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            service="shiphero",
            message=message,
            details=details
        )


class ShipHeroAuthError(ExternalServiceError):
    """Refresh-token exchange rejected; keeps the upstream status code."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(
            service="shiphero_auth",
            message=message,
            details={"upstream_status": status_code},
            status_code=status_code
        )
