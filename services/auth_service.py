"""
Token exchange service.

Trades a ShipHero refresh token for a short-lived bearer token. The
caller stores the result; nothing is kept here.
"""

from typing import Optional
import structlog

from exceptions import MissingRefreshTokenError
from integrations.shiphero import ShipHeroClient
from models.auth import TokenRefreshResponse

logger = structlog.get_logger(__name__)


class AuthService:
    """ShipHero credential issuer."""

    def __init__(self, client: Optional[ShipHeroClient] = None):
        self.client = client or ShipHeroClient()

    def refresh(
        self,
        refresh_token: Optional[str],
        account_id: Optional[str] = None,
    ) -> TokenRefreshResponse:
        """
        Exchange a refresh token.

        Args:
            refresh_token: ShipHero refresh token
            account_id: Echoed back so the caller can keep it with the token

        Returns:
            TokenRefreshResponse

        Raises:
            MissingRefreshTokenError: No refresh token given
            ShipHeroAuthError: ShipHero rejected the exchange
        """
        if not refresh_token:
            raise MissingRefreshTokenError()

        payload = self.client.refresh_access_token(refresh_token)

        return TokenRefreshResponse(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_in=payload.get("expires_in"),
            account_id=account_id or None,
        )


# Singleton instance
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get or create AuthService instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
