"""
CSV parser for case pack uploads.

Turns an uploaded file into the header list and header-keyed rows.
Every cell is kept as text; typing happens in the validation service.
"""

import csv
import warnings
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import BinaryIO, Union
import structlog

import pandas as pd

from exceptions import CSVParseError

logger = structlog.get_logger(__name__)


CSVSource = Union[str, Path, bytes, BinaryIO]


@dataclass
class CSVParseResult:
    """Result of parsing a CSV file."""
    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, str]] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        """True if at least one data row was parsed."""
        return len(self.rows) > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "headers": list(self.headers),
            "rows": [dict(row) for row in self.rows],
        }


def parse_case_pack_csv(file: CSVSource) -> CSVParseResult:
    """
    Parse a case pack CSV.

    The first line is the header and fully empty lines are skipped.
    A file with no data lines yields empty headers and rows.

    Args:
        file: Raw bytes, a file path (str/Path) or a binary file object

    Returns:
        CSVParseResult with headers in file order and one dict per data row

    Raises:
        CSVParseError: Malformed quoting, wrong field count, repeated column
            name or undecodable bytes
    """
    logger.info("parsing_csv", file_type=type(file).__name__)

    text = _read_text(file)

    try:
        # Long rows are rejected below; pandas would only warn and truncate them
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", pd.errors.ParserWarning)
            df = pd.read_csv(
                StringIO(text),
                dtype=str,
                index_col=False,
                keep_default_na=False,
                skip_blank_lines=True,
            )
    except pd.errors.EmptyDataError:
        logger.info("csv_empty")
        return CSVParseResult()
    except pd.errors.ParserError as e:
        logger.warning("csv_parse_failed", error=str(e))
        raise CSVParseError(
            message=_first_line(str(e)),
            details={"original_error": str(e)}
        )

    # pandas pads short lines with empty cells; reject them like long ones
    headers = _scan_header_and_field_counts(text)

    rows = [
        dict(zip(headers, values))
        for values in df.itertuples(index=False, name=None)
    ]

    if not rows:
        # Headers come from the first data row, so none without data
        headers = []

    logger.info(
        "csv_parsed",
        header_count=len(headers),
        row_count=len(rows)
    )

    return CSVParseResult(headers=headers, rows=rows)


def parse_case_pack_text(text: str) -> CSVParseResult:
    """Parse CSV content that is already decoded."""
    return parse_case_pack_csv(text.encode("utf-8"))


# ===================
# HELPER FUNCTIONS
# ===================

def _read_text(file: CSVSource) -> str:
    """Load the source and decode it as UTF-8, dropping a BOM."""
    if isinstance(file, (str, Path)):
        raw = Path(file).read_bytes()
    elif isinstance(file, bytes):
        raw = file
    else:
        raw = file.read()

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("csv_decode_failed", error=str(e))
        raise CSVParseError(
            message="File is not valid UTF-8 text",
            details={"original_error": str(e)}
        )


def _is_blank(fields: list[str]) -> bool:
    return not fields or (len(fields) == 1 and not fields[0].strip())


def _scan_header_and_field_counts(text: str) -> list[str]:
    """
    Return the header row exactly as written and check every data line against it.

    pandas renames empty and repeated column names ("Unnamed: 3", "sku.1"),
    so the names are read here instead. Raises on a repeated non-empty name
    and on the first non-empty line whose field count differs from the header.
    """
    reader = csv.reader(StringIO(text))

    try:
        headers = next((fields for fields in reader if not _is_blank(fields)), [])

        seen = set()
        for name in headers:
            if name and name in seen:
                raise CSVParseError(
                    message=f'Duplicate column name "{name}"',
                    details={"column": name}
                )
            seen.add(name)

        expected = len(headers)
        for fields in reader:
            if _is_blank(fields):
                continue
            if len(fields) != expected:
                problem = "Too few fields" if len(fields) < expected else "Too many fields"
                raise CSVParseError(
                    message=(
                        f"{problem}: expected {expected} fields but parsed "
                        f"{len(fields)} (line {reader.line_num})"
                    ),
                    details={"line": reader.line_num}
                )
    except csv.Error as e:
        raise CSVParseError(message=str(e), details={"line": reader.line_num})

    return headers


def _first_line(message: str) -> str:
    """pandas errors can span lines; keep the first."""
    return message.strip().splitlines()[0] if message.strip() else "Unknown error"
