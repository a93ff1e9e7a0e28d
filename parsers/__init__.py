"""
File parsers module.
"""

from parsers.csv_parser import (
    parse_case_pack_csv,
    parse_case_pack_text,
    CSVParseResult,
)

__all__ = [
    "parse_case_pack_csv",
    "parse_case_pack_text",
    "CSVParseResult",
]
