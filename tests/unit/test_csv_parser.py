"""
Unit tests for the CSV parser.

Run: pytest tests/unit/test_csv_parser.py -v
"""

import pytest

from parsers.csv_parser import (
    parse_case_pack_csv,
    parse_case_pack_text,
    CSVParseResult,
)
from exceptions import CSVParseError


class TestValidFileParsing:
    """Tests for successfully parsing valid files."""

    def test_header_and_rows_parsed_in_order(self):
        """Header becomes keys; rows keep file order."""
        content = b"SKU,Case Barcode,Case Qty\nA1,B1,5\nA2,B2,10\n"

        result = parse_case_pack_csv(content)

        assert result.headers == ["SKU", "Case Barcode", "Case Qty"]
        assert result.rows == [
            {"SKU": "A1", "Case Barcode": "B1", "Case Qty": "5"},
            {"SKU": "A2", "Case Barcode": "B2", "Case Qty": "10"},
        ]

    def test_cells_are_kept_as_text(self):
        """Leading zeros and numeric-looking cells are not converted."""
        result = parse_case_pack_csv(b"sku,barcode,qty\n00123,0009876543210,012\n")

        assert result.rows[0] == {"sku": "00123", "barcode": "0009876543210", "qty": "012"}

    def test_empty_cells_are_empty_strings(self):
        """Empty cells stay "" rather than NaN."""
        result = parse_case_pack_csv(b"sku,barcode,qty\n,B2,3\n")

        assert result.rows[0] == {"sku": "", "barcode": "B2", "qty": "3"}

    def test_na_like_values_are_not_treated_as_missing(self):
        """Values such as NA or null are literal text."""
        result = parse_case_pack_csv(b"sku,barcode,qty\nNA,null,N/A\n")

        assert result.rows[0] == {"sku": "NA", "barcode": "null", "qty": "N/A"}

    def test_blank_lines_are_skipped(self):
        """Fully empty lines produce no rows."""
        content = b"sku,barcode,qty\nA1,B1,5\n\n\nA2,B2,6\n\n"

        result = parse_case_pack_csv(content)

        assert len(result.rows) == 2
        assert [r["sku"] for r in result.rows] == ["A1", "A2"]

    def test_quoted_fields_with_commas(self):
        """Quoted cells may contain the delimiter."""
        content = b'sku,barcode,qty\n"A,1","B ""1""",5\n'

        result = parse_case_pack_csv(content)

        assert result.rows[0]["sku"] == "A,1"
        assert result.rows[0]["barcode"] == 'B "1"'

    def test_utf8_bom_is_stripped(self):
        """Excel exports start with a BOM that must not leak into the header."""
        result = parse_case_pack_csv("\ufeffsku,barcode,qty\nA1,B1,5\n".encode("utf-8"))

        assert result.headers[0] == "sku"

    def test_parse_text_helper(self):
        """Decoded text parses the same way."""
        result = parse_case_pack_text("sku,barcode,qty\nA1,B1,5\n")

        assert result.rows == [{"sku": "A1", "barcode": "B1", "qty": "5"}]

    def test_path_input(self, tmp_path):
        """A file path can be parsed directly."""
        path = tmp_path / "case_packs.csv"
        path.write_text("sku,barcode,qty\nA1,B1,5\n", encoding="utf-8")

        result = parse_case_pack_csv(str(path))

        assert result.has_data is True
        assert result.rows[0]["sku"] == "A1"


class TestEmptyInput:
    """Files without data rows give an empty header set."""

    def test_empty_file_returns_empty_result(self):
        result = parse_case_pack_csv(b"")

        assert result.headers == []
        assert result.rows == []
        assert result.has_data is False

    def test_header_only_file_has_no_headers(self):
        """Headers are derived from the first data row, so none here."""
        result = parse_case_pack_csv(b"sku,barcode,qty\n")

        assert result.headers == []
        assert result.rows == []


class TestMalformedFiles:
    """Malformed content is one fatal error."""

    def test_unterminated_quote_raises(self):
        with pytest.raises(CSVParseError) as exc_info:
            parse_case_pack_csv(b'sku,barcode,qty\n"A1,B1,5\nA2,B2,6\n')

        assert exc_info.value.code == "CSV_PARSE_ERROR"
        assert exc_info.value.message.startswith("Error parsing CSV: ")

    def test_too_many_fields_raises(self):
        with pytest.raises(CSVParseError):
            parse_case_pack_csv(b"sku,barcode,qty\nA1,B1,5\nA2,B2,6,7,8\n")

    def test_too_few_fields_raises(self):
        with pytest.raises(CSVParseError) as exc_info:
            parse_case_pack_csv(b"sku,barcode,qty\nA1,B1,5\nA2,B2\n")

        assert "Too few fields" in exc_info.value.message
        assert exc_info.value.details["line"] == 3

    def test_undecodable_bytes_raise(self):
        with pytest.raises(CSVParseError):
            parse_case_pack_csv(b"sku,barcode,qty\n\xff\xfe\xfa,B1,5\n")


class TestParseResultToDict:
    def test_to_dict(self):
        result = CSVParseResult(headers=["sku"], rows=[{"sku": "A1"}])

        assert result.to_dict() == {"headers": ["sku"], "rows": [{"sku": "A1"}]}


class TestHeaderNames:
    """Row keys are the header names exactly as written in the file."""

    def test_empty_header_name_is_kept(self):
        result = parse_case_pack_csv(b"sku,barcode,qty,\nA1,B1,5,\n")

        assert result.headers == ["sku", "barcode", "qty", ""]
        assert result.rows[0] == {"sku": "A1", "barcode": "B1", "qty": "5", "": ""}

    def test_header_names_are_not_renamed(self):
        result = parse_case_pack_csv(b" SKU ,Case Barcode,Qty\nA1,B1,5\n")

        assert result.headers == [" SKU ", "Case Barcode", "Qty"]
        assert " SKU " in result.rows[0]

    def test_repeated_header_name_raises(self):
        with pytest.raises(CSVParseError) as exc_info:
            parse_case_pack_csv(b"sku,sku,qty\nA1,A2,5\n")

        assert 'Duplicate column name "sku"' in exc_info.value.message
        assert exc_info.value.details["column"] == "sku"

    def test_long_row_raises_without_pandas_warning(self, recwarn):
        with pytest.raises(CSVParseError):
            parse_case_pack_csv(b"sku,barcode,qty\nA1,B1,5,6\n")

        assert not [w for w in recwarn if "index_col" in str(w.message)]
