"""
Business logic services.

Each service handles one step of the case pack upload.
"""

from services.header_mapping_service import detect_header_mapping, apply_overrides
from services.validation_service import (
    ValidatedProduct,
    ValidationResult,
    validate_row,
    validate_rows,
    parse_int_prefix,
)
from services.product_update_service import (
    ProductUpdateService,
    OutcomeRecord,
    BatchResult,
)
from services.result_aggregator import ResultAggregator
from services.case_pack_upload_service import (
    CasePackUploadService,
    get_case_pack_upload_service,
)
from services.auth_service import AuthService, get_auth_service

__all__ = [
    "detect_header_mapping",
    "apply_overrides",
    "ValidatedProduct",
    "ValidationResult",
    "validate_row",
    "validate_rows",
    "parse_int_prefix",
    "ProductUpdateService",
    "OutcomeRecord",
    "BatchResult",
    "ResultAggregator",
    "CasePackUploadService",
    "get_case_pack_upload_service",
    "AuthService",
    "get_auth_service",
]
