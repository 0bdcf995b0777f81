"""
Tests for auth dependencies: token decoding and profile lookup.
"""

import jwt
import pytest
from fastapi import HTTPException

from bizhub.domains.auth.dependencies import (
    decode_supabase_jwt,
    fetch_profile,
    get_auth_id,
    get_current_profile,
)
from bizhub.shared.exceptions import PersistenceError, UnlinkedProfileError
from tests.helpers.supabase_mocks import api_error, make_db, make_query


class TestDecodeSupabaseJwt:
    def test_valid_token(self, valid_jwt_token):
        payload = decode_supabase_jwt(valid_jwt_token)

        assert payload.sub == "test-profile-id-123"
        assert payload.email == "test@example.com"

    def test_wrong_secret(self, invalid_jwt_token):
        with pytest.raises(HTTPException) as exc_info:
            decode_supabase_jwt(invalid_jwt_token)

        assert exc_info.value.status_code == 401

    def test_expired_token(self, test_jwt_secret):
        token = jwt.encode({"sub": "someone", "exp": 1}, test_jwt_secret, algorithm="HS256")

        with pytest.raises(HTTPException) as exc_info:
            decode_supabase_jwt(token)

        assert exc_info.value.detail == "Invalid or expired token"


class TestGetAuthId:
    def test_returns_subject(self, valid_jwt_token):
        assert get_auth_id(f"Bearer {valid_jwt_token}") == "test-profile-id-123"

    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer"])
    def test_missing_or_malformed_header(self, header):
        with pytest.raises(HTTPException) as exc_info:
            get_auth_id(header)

        assert exc_info.value.status_code == 401

    def test_token_without_subject(self, test_jwt_secret):
        token = jwt.encode({"email": "x@example.com"}, test_jwt_secret, algorithm="HS256")

        with pytest.raises(HTTPException) as exc_info:
            get_auth_id(f"Bearer {token}")

        assert exc_info.value.status_code == 401


class TestProfileLookup:
    @pytest.mark.asyncio
    async def test_fetch_profile(self):
        query = make_query(
            data=[{"id": "p1", "email": "a@example.com", "role": "Employee"}]
        )

        profile = await fetch_profile(make_db(profiles=query), "p1")

        assert profile.role == "Employee"
        query.eq.assert_called_once_with("id", "p1")

    @pytest.mark.asyncio
    async def test_missing_profile_raises_unlinked(self):
        db = make_db(profiles=make_query(data=[]))

        with pytest.raises(UnlinkedProfileError):
            await get_current_profile(auth_id="p1", db=db)

    @pytest.mark.asyncio
    async def test_fetch_failure(self):
        db = make_db(profiles=make_query(error=api_error("permission denied")))

        with pytest.raises(PersistenceError) as exc_info:
            await fetch_profile(db, "p1")

        assert "permission denied" in exc_info.value.detail
