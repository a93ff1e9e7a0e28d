"""
ShipHero token exchange schemas.
"""

from typing import Optional

from pydantic import Field

from models.base import BaseSchema


class TokenRefreshRequest(BaseSchema):
    """Body of POST /api/shiphero/auth/refresh."""

    refresh_token: Optional[str] = Field(None, alias="refreshToken")
    account_id: Optional[str] = Field(None, alias="accountId")


class TokenRefreshResponse(BaseSchema):
    """Fresh bearer credential for the product API."""

    access_token: str = Field(..., alias="accessToken")
    refresh_token: Optional[str] = Field(None, alias="refreshToken")
    expires_in: Optional[int] = Field(None, alias="expiresIn")
    account_id: Optional[str] = Field(None, alias="accountId")
