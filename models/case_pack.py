"""
Case pack upload schemas.

JSON field names are camelCase (the frontend's format); Python
attributes stay snake_case.
"""

from typing import Optional, Union

from pydantic import ConfigDict, Field

from models.base import BaseSchema


# Display names used in row-level error messages
ROLE_LABELS = {
    "sku": "SKU",
    "case_barcode": "Case Barcode",
    "case_quantity": "Case Quantity",
}

# A cell as sent by the frontend; nested lists and objects are rejected
CellValue = Optional[Union[str, int, float, bool]]


class FieldMapping(BaseSchema):
    """
    Binding of the three case pack roles to CSV column names.

    An empty string means the role is not mapped yet. Column names are
    kept exactly as sent so they match the CSV header keys.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    sku: str = Field(
        default="",
        description="Column holding the product SKU"
    )
    case_barcode: str = Field(
        default="",
        alias="caseBarcode",
        description="Column holding the case barcode"
    )
    case_quantity: str = Field(
        default="",
        alias="caseQuantity",
        description="Column holding units per case"
    )

    def missing_roles(self) -> list[str]:
        """Roles with no column bound, in display order."""
        return [
            role for role in ROLE_LABELS
            if not getattr(self, role)
        ]

    @property
    def is_complete(self) -> bool:
        return not self.missing_roles()


class ProcessCSVRequest(BaseSchema):
    """
    Body of POST /api/process-csv.

    data and mapping are optional at the schema level so a missing
    value produces the upload error instead of a generic 422.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    data: Optional[list[dict[str, CellValue]]] = Field(
        None,
        description="Parsed CSV rows keyed by header"
    )
    mapping: Optional[FieldMapping] = None
    account_id: Optional[str] = Field(
        None,
        alias="accountId",
        description="ShipHero account id (not sent upstream)"
    )


class ProcessingResult(BaseSchema):
    """Outcome of one processing request."""

    success_count: int = Field(0, ge=0, alias="successCount")
    error_count: int = Field(0, ge=0, alias="errorCount")
    total_processed: int = Field(0, ge=0, alias="totalProcessed")
    errors: list[str] = Field(default_factory=list)


class CSVPreviewResponse(BaseSchema):
    """Parsed CSV with the suggested column mapping."""

    model_config = ConfigDict(str_strip_whitespace=False)

    headers: list[str]
    rows: list[dict[str, str]]
    row_count: int = Field(..., ge=0, alias="rowCount")
    suggested_mapping: FieldMapping = Field(..., alias="suggestedMapping")
    mapping_complete: bool = Field(..., alias="mappingComplete")
