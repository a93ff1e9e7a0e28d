"""
Unit tests for header auto-detection.

Run: pytest tests/unit/test_header_mapping_service.py -v
"""

from models.case_pack import FieldMapping
from services.header_mapping_service import (
    apply_overrides,
    classify_header,
    detect_header_mapping,
)


class TestClassifyHeader:
    """Tests for classify_header()"""

    def test_sku_keywords(self):
        assert classify_header("SKU") == "sku"
        assert classify_header("Product Code") == "sku"

    def test_barcode_keywords(self):
        assert classify_header("Case Barcode") == "case_barcode"
        assert classify_header("case_barcode") == "case_barcode"

    def test_quantity_keywords(self):
        assert classify_header("Case Quantity") == "case_quantity"
        assert classify_header("QTY") == "case_quantity"
        assert classify_header("case_quantity") == "case_quantity"

    def test_sku_checked_before_barcode(self):
        """A column matching both groups is a SKU column."""
        assert classify_header("Product Barcode") == "sku"

    def test_unrelated_header(self):
        assert classify_header("Description") is None


class TestDetectHeaderMapping:
    """Tests for detect_header_mapping()"""

    def test_common_headers_fully_mapped(self):
        mapping = detect_header_mapping(["SKU", "Case Barcode", "Case Quantity"])

        assert mapping == FieldMapping(
            sku="SKU",
            case_barcode="Case Barcode",
            case_quantity="Case Quantity",
        )
        assert mapping.is_complete is True

    def test_first_matching_column_wins(self):
        """Later columns never overwrite a claimed role."""
        mapping = detect_header_mapping([
            "Warehouse",
            "Product SKU",
            "Parent SKU",
            "Inner Barcode",
            "Outer Barcode",
            "Qty",
            "Pallet Quantity",
        ])

        assert mapping.sku == "Product SKU"
        assert mapping.case_barcode == "Inner Barcode"
        assert mapping.case_quantity == "Qty"

    def test_column_claims_only_one_role(self):
        """A SKU-classified column is not reused for the barcode role."""
        mapping = detect_header_mapping(["sku", "product_barcode", "qty"])

        assert mapping.sku == "sku"
        assert mapping.case_barcode == ""
        assert mapping.missing_roles() == ["case_barcode"]

    def test_no_headers_gives_empty_mapping(self):
        mapping = detect_header_mapping([])

        assert mapping.missing_roles() == ["sku", "case_barcode", "case_quantity"]
        assert mapping.is_complete is False

    def test_column_names_are_kept_verbatim(self):
        """Whitespace and case in the header are preserved for lookup."""
        mapping = detect_header_mapping([" Sku ", "BARCODE", "qty "])

        assert mapping.sku == " Sku "
        assert mapping.case_quantity == "qty "


class TestApplyOverrides:
    def test_override_replaces_only_given_roles(self):
        detected = FieldMapping(sku="SKU", case_barcode="", case_quantity="Qty")

        mapping = apply_overrides(detected, case_barcode="UPC")

        assert mapping == FieldMapping(sku="SKU", case_barcode="UPC", case_quantity="Qty")
        assert detected.case_barcode == ""

    def test_no_overrides_returns_equal_mapping(self):
        detected = FieldMapping(sku="a", case_barcode="b", case_quantity="c")

        assert apply_overrides(detected) == detected
