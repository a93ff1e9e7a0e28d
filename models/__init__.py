"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.case_pack import (
    ROLE_LABELS,
    CellValue,
    FieldMapping,
    ProcessCSVRequest,
    ProcessingResult,
    CSVPreviewResponse,
)
from models.auth import (
    TokenRefreshRequest,
    TokenRefreshResponse,
)

__all__ = [
    "BaseSchema",
    "ROLE_LABELS",
    "CellValue",
    "FieldMapping",
    "ProcessCSVRequest",
    "ProcessingResult",
    "CSVPreviewResponse",
    "TokenRefreshRequest",
    "TokenRefreshResponse",
]
