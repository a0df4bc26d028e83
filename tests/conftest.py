"""
Shared pytest fixtures for SATUSEHAT client tests.
"""

import json
import os
from typing import Any
from unittest.mock import AsyncMock

import pytest

# Keep tests independent of any local .env credentials
os.environ["SATUSEHAT_CLIENT_ID"] = ""
os.environ["SATUSEHAT_CLIENT_SECRET"] = ""
os.environ["SATUSEHAT_ENVIRONMENT"] = "development"

from satusehat.auth.token_manager import TokenManager  # noqa: E402
from satusehat.http import HTTPResponse, HTTPTransport  # noqa: E402

FHIR_BASE_URL = "https://x/fhir"
AUTH_BASE_URL = "https://auth.example.com/oauth2/v1"
FIXED_NOW_MS = 1_700_000_000_000


def _json_response(status: int, payload: Any) -> HTTPResponse:
    return HTTPResponse(
        status=status,
        body=json.dumps(payload),
        headers={"Content-Type": "application/json"},
    )


def _token_payload(
    access_token: str = "test-access-token",
    expires_in: int = 3599,
    issued_at: int = FIXED_NOW_MS,
) -> dict[str, Any]:
    """Token endpoint body as SATUSEHAT sends it (numbers as strings)."""
    return {
        "refresh_token_expires_in": "0",
        "api_product_list": "[api-satusehat-stg]",
        "organization_name": "ihs-prod-1",
        "developer.email": "dev@example.com",
        "token_type": "BearerToken",
        "issued_at": str(issued_at),
        "client_id": "test-client",
        "access_token": access_token,
        "application_name": "test-app",
        "scope": "",
        "expires_in": str(expires_in),
        "refresh_count": "0",
        "status": "approved",
    }


@pytest.fixture
def json_response():
    """Factory building an HTTPResponse with a JSON body."""
    return _json_response


@pytest.fixture
def token_payload():
    """Factory building a token endpoint success body."""
    return _token_payload


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset cached settings between tests to avoid state leakage."""
    from satusehat.config.settings import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def mock_transport() -> AsyncMock:
    """Create a mock HTTP transport."""
    transport = AsyncMock(spec=HTTPTransport)
    transport.request = AsyncMock()
    return transport


@pytest.fixture
def mock_token_manager() -> AsyncMock:
    """Create a mock token manager that always hands out the same token."""
    manager = AsyncMock(spec=TokenManager)
    manager.get_valid_token = AsyncMock(return_value="test-token")
    return manager


@pytest.fixture
def sample_patient() -> dict[str, Any]:
    """Sample FHIR Patient resource."""
    return {
        "resourceType": "Patient",
        "id": "P02478375538",
        "meta": {
            "versionId": "1",
            "lastUpdated": "2024-01-15T10:30:00Z",
        },
        "identifier": [
            {
                "use": "official",
                "system": "https://fhir.kemkes.go.id/id/nik",
                "value": "9271060312000001",
            }
        ],
        "active": True,
        "name": [
            {
                "use": "official",
                "text": "John Smith",
            }
        ],
        "gender": "male",
        "birthDate": "1970-05-15",
    }


@pytest.fixture
def sample_organization() -> dict[str, Any]:
    """Sample FHIR Organization resource."""
    return {
        "resourceType": "Organization",
        "id": "abddd50b-b22f-4d68-a1c3-d2c29a27698b",
        "active": True,
        "identifier": [
            {
                "use": "official",
                "system": "http://sys-ids.kemkes.go.id/organization/10000004",
                "value": "Pos Imunisasi",
            }
        ],
        "type": [
            {
                "coding": [
                    {
                        "system": "http://terminology.hl7.org/CodeSystem/organization-type",
                        "code": "dept",
                        "display": "Hospital Department",
                    }
                ]
            }
        ],
        "name": "RS Sehat",
        "telecom": [
            {"system": "phone", "value": "+6221-783042654", "use": "work"},
            {"system": "email", "value": "rs-sehat@example.com", "use": "work"},
        ],
        "address": [
            {
                "use": "work",
                "line": ["Jalan Jati Asih"],
                "city": "Jakarta",
                "postalCode": "55292",
                "country": "ID",
            }
        ],
        "partOf": {"reference": "Organization/10000004"},
    }


@pytest.fixture
def sample_bundle(sample_patient) -> dict[str, Any]:
    """Sample FHIR search Bundle."""
    return {
        "resourceType": "Bundle",
        "type": "searchset",
        "total": 2,
        "entry": [
            {
                "fullUrl": f"{FHIR_BASE_URL}/Patient/P02478375538",
                "resource": sample_patient,
                "search": {"mode": "match"},
            },
            {
                "fullUrl": f"{FHIR_BASE_URL}/Patient/P03647103112",
                "resource": {
                    "resourceType": "Patient",
                    "id": "P03647103112",
                    "name": [{"use": "official", "text": "Jane Doe"}],
                },
                "search": {"mode": "match"},
            },
        ],
        "link": [
            {"relation": "self", "url": f"{FHIR_BASE_URL}/Patient?name=John"},
            {"relation": "next", "url": f"{FHIR_BASE_URL}/Patient?name=John&page=2"},
        ],
    }


@pytest.fixture
def not_found_outcome() -> dict[str, Any]:
    """OperationOutcome body for a missing resource."""
    return {
        "resourceType": "OperationOutcome",
        "issue": [{"severity": "error", "code": "not-found", "diagnostics": "not found"}],
    }
