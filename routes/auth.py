"""
ShipHero authentication routes.
"""

from typing import Optional

from fastapi import APIRouter, Body
import structlog

from models.auth import TokenRefreshRequest, TokenRefreshResponse
from routes.error_responses import handle_error
from services.auth_service import get_auth_service

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/refresh", response_model=TokenRefreshResponse)
def refresh_token(payload: Optional[TokenRefreshRequest] = Body(None)):
    """
    Exchange a ShipHero refresh token for an access token.

    Raises:
        400: No refresh token
        4xx/5xx: ShipHero's status, with its reason as the message
    """
    try:
        service = get_auth_service()
        return service.refresh(
            refresh_token=payload.refresh_token if payload else None,
            account_id=payload.account_id if payload else None,
        )

    except Exception as e:
        return handle_error(e)
