"""
Case pack API routes.

POST /api/parse-csv    Parse an uploaded file and suggest a column mapping
POST /api/process-csv  Validate mapped rows and push them to ShipHero
"""

from typing import Optional

from fastapi import APIRouter, Body, File, Header, UploadFile
import structlog

from exceptions import InvalidFileTypeError
from models.case_pack import CSVPreviewResponse, ProcessCSVRequest, ProcessingResult
from parsers.csv_parser import parse_case_pack_csv
from routes.error_responses import handle_error
from services.case_pack_upload_service import get_case_pack_upload_service
from services.header_mapping_service import detect_header_mapping

logger = structlog.get_logger(__name__)

router = APIRouter()


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an Authorization header; a bare token is accepted as-is."""
    if not authorization:
        return None
    token = authorization.replace("Bearer ", "", 1).strip()
    return token or None


# ===================
# ROUTES
# ===================

@router.post("/parse-csv", response_model=CSVPreviewResponse)
async def parse_csv(file: UploadFile = File(...)):
    """
    Parse a case pack CSV.

    Returns the header row, the data rows and a suggested mapping the
    user confirms before calling /process-csv.

    Raises:
        422: Not a .csv file, or the file could not be parsed
    """
    logger.info(
        "csv_preview_started",
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        if not (file.filename or "").lower().endswith(".csv"):
            raise InvalidFileTypeError(file.filename)

        content = await file.read()
        parsed = parse_case_pack_csv(content)
        mapping = detect_header_mapping(parsed.headers)

        return CSVPreviewResponse(
            headers=parsed.headers,
            rows=parsed.rows,
            row_count=len(parsed.rows),
            suggested_mapping=mapping,
            mapping_complete=mapping.is_complete,
        )

    except Exception as e:
        return handle_error(e)


@router.post("/process-csv", response_model=ProcessingResult)
def process_csv(
    payload: Optional[ProcessCSVRequest] = Body(None),
    authorization: Optional[str] = Header(None),
):
    """
    Push mapped case pack rows to ShipHero.

    Sync endpoint: the upload sleeps between products, so it runs in
    the threadpool instead of the event loop.

    Raises:
        400: Missing data or mapping, incomplete mapping, no valid rows
        401: No access token
    """
    try:
        service = get_case_pack_upload_service()
        return service.process(
            rows=payload.data if payload else None,
            mapping=payload.mapping if payload else None,
            access_token=extract_bearer_token(authorization),
            account_id=payload.account_id if payload else None,
        )

    except Exception as e:
        return handle_error(e)
