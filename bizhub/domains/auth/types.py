"""Auth domain type definitions for type safety."""

from typing import Optional

from pydantic import BaseModel, Field


class SupabaseJwtPayload(BaseModel):
    """Claims read from a Supabase access token."""

    sub: Optional[str] = Field(None, description="Subject (auth user ID)")
    iss: Optional[str] = Field(None, description="Token issuer")
    aud: Optional[str | list[str]] = Field(None, description="Token audience")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    email: Optional[str] = Field(None, description="User email address")

    # The Postgres role the token runs as, not the application role
    role: Optional[str] = Field(None, description="Database role")
    session_id: Optional[str] = Field(None, description="Session identifier")

    model_config = {"extra": "allow"}
