"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    BadRequestError,
    AuthenticationError,
    ExternalServiceError,

    # CSV
    CSVParseError,
    InvalidFileTypeError,

    # Upload requests
    MissingUploadDataError,
    IncompleteMappingError,
    NoValidProductsError,
    MissingCredentialError,
    MissingRefreshTokenError,

    # ShipHero
    ShipHeroError,
    ShipHeroAuthError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "BadRequestError",
    "AuthenticationError",
    "ExternalServiceError",

    # CSV
    "CSVParseError",
    "InvalidFileTypeError",

    # Upload requests
    "MissingUploadDataError",
    "IncompleteMappingError",
    "NoValidProductsError",
    "MissingCredentialError",
    "MissingRefreshTokenError",

    # ShipHero
    "ShipHeroError",
    "ShipHeroAuthError",
]
