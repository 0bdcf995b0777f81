# bizhub/domains/auth/dependencies.py
import logging

import jwt
from fastapi import Depends, Header, HTTPException, status
from jwt import PyJWKClient
from postgrest.exceptions import APIError
from supabase import AsyncClient

from bizhub.core.database import get_db
from bizhub.core.settings import settings
from bizhub.shared.exceptions import (
    InvalidTokenError,
    PersistenceError,
    UnlinkedProfileError,
)

from .models import Profile
from .types import SupabaseJwtPayload

logger = logging.getLogger(__name__)

JWKS_URL = (
    f"{settings.SUPABASE_URL}/auth/v1/.well-known/jwks.json"
    if settings.SUPABASE_URL
    else None
)

_jwks_client = PyJWKClient(JWKS_URL) if JWKS_URL else None


def decode_supabase_jwt(token: str) -> SupabaseJwtPayload:
    """
    Verifies JWT token. Uses JWT_SECRET when configured (legacy HS256 projects
    and tests), otherwise the project's JWKS signing keys.
    """
    if settings.JWT_SECRET:
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256"],
                options={"verify_aud": False},
            )
            return SupabaseJwtPayload(**dict(payload))
        except jwt.PyJWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
            )

    if not _jwks_client:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Supabase not configured",
        )
    try:
        signing_key = _jwks_client.get_signing_key_from_jwt(token).key
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=["RS256", "ES256"],
            options={"verify_aud": False},
        )
        return SupabaseJwtPayload(**dict(payload))
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_auth_id(authorization: str = Header(None)) -> str:
    """
    Extracts and validates the Supabase JWT from the Authorization header.
    Returns the user's UUID (from the `sub` claim).
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError()

    token = authorization.split(" ", 1)[1]
    payload = decode_supabase_jwt(token)
    if not payload.sub:
        raise InvalidTokenError()
    return payload.sub


async def fetch_profile(db: AsyncClient, profile_id: str) -> Profile | None:
    """Load a profile row; None when the user has no profile yet."""
    try:
        response = (
            await db.table("profiles")
            .select("id, email, full_name, avatar_url, organization_id, role")
            .eq("id", profile_id)
            .limit(1)
            .execute()
        )
    except APIError as e:
        logger.error(f"Error fetching profile {profile_id}: {e.message}")
        raise PersistenceError(f"Error fetching profile: {e.message}")

    if not response.data:
        return None
    return Profile.from_row(response.data[0])


async def get_current_profile(
    auth_id: str = Depends(get_auth_id), db: AsyncClient = Depends(get_db)
) -> Profile:
    """
    Finds the profile row of the authenticated user.
    """
    profile = await fetch_profile(db, auth_id)
    if profile is None:
        logger.warning(f"No profile found for auth user {auth_id}")
        raise UnlinkedProfileError()
    return profile
