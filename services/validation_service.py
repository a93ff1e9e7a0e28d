"""
Row validation for case pack uploads.

Turns header-keyed CSV rows into ValidatedProduct records. Invalid
rows are dropped with a one-line message; they never stop the rest
of the file.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union
import re
import structlog

from models.case_pack import FieldMapping

logger = structlog.get_logger(__name__)


# Optional sign then digits; anything after the digits is ignored
_INT_PREFIX = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ValidatedProduct:
    """A row that passed validation, ready for upload."""
    sku: str
    case_barcode: str
    case_quantity: int
    row_number: int


@dataclass
class ValidationResult:
    """Products and row errors, both in file order."""
    products: list[ValidatedProduct] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def has_products(self) -> bool:
        return len(self.products) > 0


def parse_int_prefix(value: str) -> Optional[int]:
    """
    Parse the leading integer of a string.

    Leading whitespace and a sign are accepted and trailing characters
    ignored: "10abc" -> 10, " -5" -> -5, "3.7" -> 3.

    Returns:
        The integer, or None when no digits lead the string
    """
    match = _INT_PREFIX.match(value.lstrip())
    if match is None:
        return None
    return int(match.group())


def row_number_for(index: int) -> int:
    """File line of data row `index` (0-based), counting the header."""
    return index + 2


def _cell(row: Mapping[str, Any], column: str) -> str:
    value = row.get(column)
    if value is None:
        return ""
    return str(value).strip()


def validate_row(
    row: Mapping[str, Any],
    mapping: FieldMapping,
    index: int,
) -> Union[ValidatedProduct, str]:
    """
    Validate one row.

    Args:
        row: Header-keyed cells
        mapping: Columns supplying each role
        index: 0-based position of the row among data rows

    Returns:
        ValidatedProduct, or the error message for the row
    """
    row_number = row_number_for(index)

    sku = _cell(row, mapping.sku)
    case_barcode = _cell(row, mapping.case_barcode)
    quantity_text = _cell(row, mapping.case_quantity)

    if not sku or not case_barcode or not quantity_text:
        return (
            f"Row {row_number}: Missing required fields "
            f"(SKU: {sku or 'empty'}, "
            f"Case Barcode: {case_barcode or 'empty'}, "
            f"Case Quantity: {quantity_text or 'empty'})"
        )

    case_quantity = parse_int_prefix(quantity_text)
    if case_quantity is None or case_quantity <= 0:
        return (
            f'Row {row_number}: Invalid case quantity "{quantity_text}" '
            f"(must be a positive number)"
        )

    return ValidatedProduct(
        sku=sku,
        case_barcode=case_barcode,
        case_quantity=case_quantity,
        row_number=row_number,
    )


def validate_rows(
    rows: list[Mapping[str, Any]],
    mapping: FieldMapping,
) -> ValidationResult:
    """
    Validate every row in order.

    len(result.products) + len(result.errors) == len(rows).
    """
    result = ValidationResult()

    for index, row in enumerate(rows):
        outcome = validate_row(row, mapping, index)
        if isinstance(outcome, ValidatedProduct):
            result.products.append(outcome)
        else:
            result.errors.append(outcome)

    logger.info(
        "rows_validated",
        row_count=len(rows),
        valid_count=len(result.products),
        error_count=len(result.errors)
    )

    return result
