"""
Unit tests for AuthService.

Run: pytest tests/unit/test_auth_service.py -v
"""

import pytest

from exceptions import MissingRefreshTokenError, ShipHeroAuthError
from services.auth_service import AuthService


class TestRefresh:

    def test_returns_new_credential(self, mock_shiphero_client):
        mock_shiphero_client.refresh_access_token.return_value = {
            "access_token": "new-access",
            "refresh_token": "rotated",
            "expires_in": 2419200,
        }
        service = AuthService(client=mock_shiphero_client)

        result = service.refresh("refresh-1", account_id="acct-9")

        assert result.access_token == "new-access"
        assert result.refresh_token == "rotated"
        assert result.expires_in == 2419200
        assert result.account_id == "acct-9"
        mock_shiphero_client.refresh_access_token.assert_called_once_with("refresh-1")

    def test_optional_fields_may_be_absent(self, mock_shiphero_client):
        mock_shiphero_client.refresh_access_token.return_value = {"access_token": "a"}
        service = AuthService(client=mock_shiphero_client)

        result = service.refresh("refresh-1")

        assert result.refresh_token is None
        assert result.expires_in is None
        assert result.account_id is None

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_refresh_token(self, mock_shiphero_client, token):
        service = AuthService(client=mock_shiphero_client)

        with pytest.raises(MissingRefreshTokenError) as exc_info:
            service.refresh(token)

        assert exc_info.value.status_code == 400
        mock_shiphero_client.refresh_access_token.assert_not_called()

    def test_upstream_rejection_propagates(self, mock_shiphero_client):
        mock_shiphero_client.refresh_access_token.side_effect = ShipHeroAuthError(
            "Invalid refresh token", status_code=403
        )
        service = AuthService(client=mock_shiphero_client)

        with pytest.raises(ShipHeroAuthError) as exc_info:
            service.refresh("bad")

        assert exc_info.value.status_code == 403

    def test_response_serializes_camel_case(self, mock_shiphero_client):
        mock_shiphero_client.refresh_access_token.return_value = {
            "access_token": "a", "refresh_token": "r", "expires_in": 60,
        }
        service = AuthService(client=mock_shiphero_client)

        body = service.refresh("refresh-1", account_id="x").model_dump(by_alias=True)

        assert body == {
            "accessToken": "a",
            "refreshToken": "r",
            "expiresIn": 60,
            "accountId": "x",
        }
