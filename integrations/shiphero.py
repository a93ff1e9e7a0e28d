"""
ShipHero API integration.

Two calls are used: the refresh-token exchange and the product_update
GraphQL mutation that sets a product's case barcode and quantity.
"""

import json
from typing import Any, Optional
import requests
import structlog

from config.settings import settings
from exceptions import ShipHeroError, ShipHeroAuthError

logger = structlog.get_logger(__name__)


PRODUCT_UPDATE_MUTATION = """
mutation product_update($data: UpdateProductInput!) {
  product_update(data: $data) {
    request_id
    complexity
    product {
      sku
      name
    }
  }
}
"""

# Upstream error bodies are echoed back truncated to this many characters
AUTH_ERROR_BODY_LIMIT = 200


def build_product_update_variables(
    sku: str,
    case_barcode: str,
    case_quantity: int,
) -> dict:
    """
    Variables for the product_update mutation.

    No customer_account_id: a child account token already scopes the call.
    """
    return {
        "data": {
            "sku": sku,
            "cases": [{
                "case_barcode": case_barcode,
                "case_quantity": case_quantity,
            }],
        }
    }


def extract_auth_error_message(status_code: int, body: str) -> str:
    """
    Human-readable reason from a failed token exchange.

    Prefers error_description, then error, from a JSON body. A body that
    is not JSON is echoed with the status code.
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return f"ShipHero API Error: {status_code} - {body[:AUTH_ERROR_BODY_LIMIT]}"

    if isinstance(payload, dict):
        return (
            payload.get("error_description")
            or payload.get("error")
            or "Authentication failed"
        )
    return "Authentication failed"


class ShipHeroClient:
    """
    Thin wrapper over the ShipHero HTTP API.

    The bearer token is given by the caller and never refreshed here.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        api_url: Optional[str] = None,
        auth_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.access_token = access_token
        self.api_url = api_url or settings.shiphero_api_url
        self.auth_url = auth_url or settings.shiphero_auth_url
        self.timeout = timeout or settings.shiphero_request_timeout
        self.http = session or requests.Session()

    def close(self) -> None:
        """Release the session's pooled connections."""
        self.http.close()

    def __enter__(self) -> "ShipHeroClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    # ===================
    # AUTH
    # ===================

    def refresh_access_token(self, refresh_token: str) -> dict[str, Any]:
        """
        Exchange a refresh token for a bearer token.

        Args:
            refresh_token: Long-lived ShipHero refresh token

        Returns:
            Raw token payload (access_token, refresh_token, expires_in)

        Raises:
            ShipHeroAuthError: Upstream rejected the token or was unreachable
        """
        logger.info("shiphero_token_refresh_started")

        try:
            response = self.http.post(
                self.auth_url,
                json={"refresh_token": refresh_token},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("shiphero_auth_request_failed", error=str(e))
            raise ShipHeroAuthError(
                f"Failed to reach ShipHero: {str(e)}",
                status_code=502
            )

        if not response.ok:
            body = response.text
            logger.error(
                "shiphero_auth_rejected",
                status=response.status_code,
                body=body[:AUTH_ERROR_BODY_LIMIT]
            )
            raise ShipHeroAuthError(
                extract_auth_error_message(response.status_code, body),
                status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("shiphero_auth_invalid_json", error=str(e))
            raise ShipHeroAuthError(
                "Invalid response from ShipHero auth endpoint",
                status_code=502
            )

        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise ShipHeroAuthError(
                "ShipHero auth response did not include an access token",
                status_code=502
            )

        logger.info(
            "shiphero_token_refreshed",
            expires_in=payload.get("expires_in")
        )
        return payload

    # ===================
    # PRODUCTS
    # ===================

    def update_product_cases(
        self,
        sku: str,
        case_barcode: str,
        case_quantity: int,
    ) -> dict[str, Any]:
        """
        Set the case barcode and quantity of one product.

        Args:
            sku: Product SKU in ShipHero
            case_barcode: Barcode printed on the case
            case_quantity: Units per case

        Returns:
            The GraphQL "data" payload

        Raises:
            ShipHeroError: HTTP failure, transport failure or GraphQL errors.
                The message is the reason to show for the row.
        """
        variables = build_product_update_variables(sku, case_barcode, case_quantity)

        logger.debug("updating_product", sku=sku, variables=variables)

        try:
            response = self.http.post(
                self.api_url,
                json={
                    "query": PRODUCT_UPDATE_MUTATION,
                    "variables": variables,
                },
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.access_token}",
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("product_update_request_failed", sku=sku, error=str(e))
            raise ShipHeroError(str(e) or "Unknown error")

        logger.debug("product_update_response", sku=sku, status=response.status_code)

        if not response.ok:
            body = response.text
            logger.error(
                "product_update_http_error",
                sku=sku,
                status=response.status_code,
                body=body
            )
            raise ShipHeroError(
                f"HTTP error: {response.status_code} - {body}",
                details={"status": response.status_code}
            )

        try:
            result = response.json()
        except ValueError as e:
            logger.error("product_update_invalid_json", sku=sku, error=str(e))
            raise ShipHeroError(f"Invalid JSON response: {str(e)}")

        errors = result.get("errors") if isinstance(result, dict) else None
        if errors is not None:
            first = errors[0] if isinstance(errors, list) and errors else {}
            if not isinstance(first, dict):
                first = {}
            logger.error(
                "product_update_graphql_error",
                sku=sku,
                error_count=len(errors) if isinstance(errors, list) else 1,
                message=first.get("message"),
                code=first.get("code"),
                operation=first.get("operation"),
                field=first.get("field"),
            )
            raise ShipHeroError(
                first.get("message") or "GraphQL error",
                details={"errors": errors}
            )

        if not isinstance(result, dict):
            return {}
        return result.get("data") or {}
