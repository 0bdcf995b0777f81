"""
Global pytest configuration and fixtures for the BizHub Access API test suite.
"""

import os

# Must be set before settings are instantiated on first import
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"

from typing import Any, Dict, Generator  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from bizhub.core.database import get_db  # noqa: E402
from bizhub.main import app  # noqa: E402
from bizhub.shared.permissions.registry import RoleRegistry, default_registry  # noqa: E402

# Import fixtures from fixture modules
from tests.fixtures.role_fixtures import *  # noqa: F403, F401, E402


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return "test-secret-key-for-testing-only-32-chars"


@pytest.fixture
def valid_jwt_payload() -> Dict[str, Any]:
    """Valid JWT payload for testing."""
    return {
        "sub": "test-profile-id-123",
        "email": "test@example.com",
        "aud": "authenticated",
        "iss": "supabase",
        "role": "authenticated",
    }


@pytest.fixture
def valid_jwt_token(test_jwt_secret: str, valid_jwt_payload: Dict[str, Any]) -> str:
    """Generate a valid JWT token for testing."""
    return jwt.encode(valid_jwt_payload, test_jwt_secret, algorithm="HS256")


@pytest.fixture
def invalid_jwt_token() -> str:
    """Generate a token signed with the wrong secret."""
    return jwt.encode(
        {"sub": "someone"}, "wrong-secret-wrong-secret-wrong-secret", algorithm="HS256"
    )


@pytest.fixture
def auth_headers(valid_jwt_token: str) -> Dict[str, str]:
    """Generate authentication headers with valid JWT token."""
    return {"Authorization": f"Bearer {valid_jwt_token}"}


@pytest.fixture
def mock_db() -> Mock:
    """Supabase client stand-in; tests attach table builders as needed."""
    return Mock()


@pytest.fixture
def registry() -> RoleRegistry:
    return default_registry()


@pytest.fixture
def client(mock_db: Mock) -> Generator[TestClient, None, None]:
    """
    FastAPI test client with the database dependency overridden.

    The lifespan is not entered, so no Supabase connection is attempted.
    """
    app.dependency_overrides[get_db] = lambda: mock_db
    yield TestClient(app)
    app.dependency_overrides.clear()
