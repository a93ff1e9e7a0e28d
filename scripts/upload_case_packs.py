"""
Upload a case pack CSV to ShipHero from the command line.

Usage:
    # Auto-detected columns, token exchanged from SHIPHERO_REFRESH_TOKEN
    python scripts/upload_case_packs.py data/case_packs.csv

    # Explicit columns and access token
    python scripts/upload_case_packs.py data/case_packs.csv \
        --sku-column "Item" --barcode-column "Case UPC" --quantity-column "Units" \
        --access-token "$SHIPHERO_ACCESS_TOKEN"

    # Validate only, no ShipHero calls
    python scripts/upload_case_packs.py data/case_packs.csv --dry-run

Exit codes: 0 all rows uploaded, 1 some rows failed, 2 nothing uploaded.
"""

import argparse
import os
import sys
from typing import Optional

# Allow imports from the project root when running as a script
_root_dir = os.path.join(os.path.dirname(__file__), "..")
sys.path.insert(0, _root_dir)

from dotenv import load_dotenv
load_dotenv(os.path.join(_root_dir, ".env"))

import structlog

from config import configure_logging
from exceptions import AppError
from models.case_pack import ROLE_LABELS, FieldMapping, ProcessingResult
from parsers.csv_parser import parse_case_pack_csv
from services.auth_service import AuthService
from services.case_pack_upload_service import CasePackUploadService
from services.header_mapping_service import apply_overrides, detect_header_mapping
from services.validation_service import validate_rows

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_ROW_ERRORS = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Upload case barcodes and case quantities to ShipHero"
    )
    parser.add_argument("csv_path", help="CSV file with SKU, case barcode and case quantity columns")
    parser.add_argument("--sku-column", help="Column holding the SKU")
    parser.add_argument("--barcode-column", help="Column holding the case barcode")
    parser.add_argument("--quantity-column", help="Column holding the case quantity")
    parser.add_argument(
        "--access-token",
        default=os.getenv("SHIPHERO_ACCESS_TOKEN"),
        help="ShipHero bearer token (default: $SHIPHERO_ACCESS_TOKEN)"
    )
    parser.add_argument(
        "--refresh-token",
        default=os.getenv("SHIPHERO_REFRESH_TOKEN"),
        help="Exchanged for a bearer token when no access token is given "
             "(default: $SHIPHERO_REFRESH_TOKEN)"
    )
    parser.add_argument(
        "--account-id",
        default=os.getenv("SHIPHERO_ACCOUNT_ID"),
        help="ShipHero account id (default: $SHIPHERO_ACCOUNT_ID)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate rows and print errors without calling ShipHero"
    )
    return parser


def print_mapping(mapping: FieldMapping) -> None:
    print("Column mapping:")
    for role, label in ROLE_LABELS.items():
        column = getattr(mapping, role)
        print(f"  {label + ':':<16} {column or 'NOT MAPPED'}")
    print()


def print_result(result: ProcessingResult) -> None:
    separator = "=" * 50
    print(separator)
    print(f"  Processed: {result.total_processed}")
    print(f"  Succeeded: {result.success_count}")
    print(f"  Failed:    {result.error_count}")
    print(separator)
    if result.errors:
        print("Errors:")
        for message in result.errors:
            print(f"  - {message}")
        hidden = result.error_count - len(result.errors)
        if hidden > 0:
            print(f"  ... and {hidden} more")


def resolve_access_token(
    access_token: Optional[str],
    refresh_token: Optional[str],
    auth_service: Optional[AuthService] = None,
) -> str:
    """Use the access token if given, otherwise exchange the refresh token."""
    if access_token:
        return access_token
    service = auth_service or AuthService()
    return service.refresh(refresh_token).access_token


def run(
    argv: Optional[list[str]] = None,
    upload_service: Optional[CasePackUploadService] = None,
    auth_service: Optional[AuthService] = None,
) -> int:
    """Run the upload; returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        parsed = parse_case_pack_csv(args.csv_path)
    except (AppError, OSError) as e:
        print(f"ERROR: {getattr(e, 'message', str(e))}")
        return EXIT_FATAL

    if not parsed.has_data:
        print("ERROR: CSV has no data rows")
        return EXIT_FATAL

    print(f"Read {len(parsed.rows)} rows from {args.csv_path}")

    mapping = apply_overrides(
        detect_header_mapping(parsed.headers),
        sku=args.sku_column,
        case_barcode=args.barcode_column,
        case_quantity=args.quantity_column,
    )
    print_mapping(mapping)

    missing = mapping.missing_roles()
    if missing:
        labels = ", ".join(ROLE_LABELS[role] for role in missing)
        print(f"ERROR: Please map all required fields (missing: {labels})")
        return EXIT_FATAL

    if args.dry_run:
        validation = validate_rows(parsed.rows, mapping)
        print(f"Valid rows: {len(validation.products)}")
        print(f"Invalid rows: {len(validation.errors)}")
        for message in validation.errors:
            print(f"  - {message}")
        if not validation.has_products:
            return EXIT_FATAL
        return EXIT_OK if not validation.errors else EXIT_ROW_ERRORS

    try:
        token = resolve_access_token(args.access_token, args.refresh_token, auth_service)
        service = upload_service or CasePackUploadService()
        result = service.process(
            rows=parsed.rows,
            mapping=mapping,
            access_token=token,
            account_id=args.account_id,
        )
    except AppError as e:
        logger.error("case_pack_upload_aborted", code=e.code, error=e.message)
        print(f"ERROR: {e.message}")
        return EXIT_FATAL

    print_result(result)

    if result.success_count == 0:
        return EXIT_FATAL
    return EXIT_OK if result.error_count == 0 else EXIT_ROW_ERRORS


def main():
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
