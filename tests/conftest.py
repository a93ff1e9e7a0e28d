"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import pytest
from unittest.mock import MagicMock, patch

from exceptions import ShipHeroError
from integrations.shiphero import ShipHeroClient
from models.case_pack import FieldMapping
from services.case_pack_upload_service import CasePackUploadService


# ===================
# MOCK SHIPHERO
# ===================

@pytest.fixture
def mock_session() -> MagicMock:
    """
    Mock requests.Session.

    Usage:
        def test_something(mock_session):
            mock_session.post.return_value = make_response(200, {"data": {}})
    """
    return MagicMock()


@pytest.fixture
def mock_shiphero_client() -> MagicMock:
    """ShipHeroClient whose product updates all succeed."""
    client = MagicMock(spec=ShipHeroClient)
    client.update_product_cases.return_value = {"product_update": {"request_id": "req-1"}}
    return client


@pytest.fixture
def failing_shiphero_client() -> MagicMock:
    """ShipHeroClient whose product updates all return a GraphQL error."""
    client = MagicMock(spec=ShipHeroClient)
    client.update_product_cases.side_effect = ShipHeroError("Product not found")
    return client


@pytest.fixture
def no_sleep() -> MagicMock:
    """Stand-in for time.sleep that records calls."""
    return MagicMock()


# ===================
# DOMAIN FIXTURES
# ===================

@pytest.fixture
def field_mapping() -> FieldMapping:
    """Mapping for rows built by CasePackRowFactory."""
    return FieldMapping(sku="sku", case_barcode="barcode", case_quantity="qty")


@pytest.fixture
def make_upload_service(no_sleep):
    """
    Build a CasePackUploadService around a mock client.

    Usage:
        def test_something(make_upload_service, mock_shiphero_client):
            service = make_upload_service(mock_shiphero_client)
    """
    def _make(client, **kwargs) -> CasePackUploadService:
        return CasePackUploadService(
            client_factory=lambda access_token: client,
            sleep=no_sleep,
            **kwargs
        )
    return _make


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def test_client_with_mock_shiphero(make_upload_service, mock_shiphero_client):
    """
    Test client whose upload service talks to mock_shiphero_client.

    Usage:
        def test_endpoint(test_client_with_mock_shiphero, mock_shiphero_client):
            mock_shiphero_client.update_product_cases.side_effect = ...
    """
    from fastapi.testclient import TestClient
    from main import app

    service = make_upload_service(mock_shiphero_client)
    with patch("routes.case_packs.get_case_pack_upload_service", return_value=service):
        yield TestClient(app)
