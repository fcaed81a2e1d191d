"""
Shared pytest fixtures for jwt-access tests.
"""

import json

import pytest

from jwt_access import JWTAccess, ServiceAccountKey, generate_service_account


TEST_EMAIL = "foo@serviceaccount.com"


@pytest.fixture(scope="session")
def service_account() -> ServiceAccountKey:
    """Generate one RSA service account key for the whole session."""
    return generate_service_account(TEST_EMAIL, key_id="key123")


@pytest.fixture
def credentials_json(service_account) -> dict:
    """Standard service account JSON object."""
    return {
        "private_key_id": "key123",
        "private_key": service_account.private_key_pem,
        "client_email": "hello@youarecool.com",
        "client_id": "client123",
        "type": "service_account",
    }


@pytest.fixture
def credentials_file(tmp_path, credentials_json) -> str:
    """Service account JSON written to disk."""
    path = tmp_path / "private.json"
    path.write_text(json.dumps(credentials_json))
    return str(path)


@pytest.fixture
def client(service_account) -> JWTAccess:
    """Issuer populated with the session key."""
    return JWTAccess(TEST_EMAIL, service_account.private_key_pem)


@pytest.fixture
def empty_client() -> JWTAccess:
    """Issuer without an identity."""
    return JWTAccess()
