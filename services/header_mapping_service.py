"""
Header mapping service.

Suggests which CSV column supplies each case pack role. The caller
confirms or overrides the suggestion before processing.
"""

from typing import Optional
import structlog

from models.case_pack import FieldMapping

logger = structlog.get_logger(__name__)


# Checked in this order; a column is classified into the first role it matches
ROLE_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("sku", ("sku", "product")),
    ("case_barcode", ("barcode", "case_barcode")),
    ("case_quantity", ("quantity", "qty", "case_quantity")),
]


def classify_header(header: str) -> Optional[str]:
    """
    Return the role a column name suggests, or None.

    Case-insensitive substring match. "Product Barcode" is a SKU
    column because SKU keywords are checked first.
    """
    lower = header.lower()
    for role, keywords in ROLE_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return role
    return None


def detect_header_mapping(headers: list[str]) -> FieldMapping:
    """
    Build the suggested mapping for a header row.

    Columns are scanned left to right and the first column classified
    into a role claims it. Unmatched roles stay empty.

    Args:
        headers: Column names in file order

    Returns:
        FieldMapping, possibly incomplete
    """
    assigned: dict[str, str] = {}

    for header in headers:
        role = classify_header(header)
        if role and role not in assigned:
            assigned[role] = header

    mapping = FieldMapping(**assigned)

    logger.info(
        "header_mapping_detected",
        header_count=len(headers),
        mapping=mapping.model_dump(),
        missing=mapping.missing_roles()
    )

    return mapping


def apply_overrides(
    mapping: FieldMapping,
    sku: Optional[str] = None,
    case_barcode: Optional[str] = None,
    case_quantity: Optional[str] = None,
) -> FieldMapping:
    """Return a copy of mapping with the given roles replaced."""
    overrides = {
        role: column
        for role, column in (
            ("sku", sku),
            ("case_barcode", case_barcode),
            ("case_quantity", case_quantity),
        )
        if column is not None
    }
    return mapping.model_copy(update=overrides)
