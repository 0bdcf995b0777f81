# bizhub/core/database.py
import logging

from fastapi import HTTPException, status
from supabase import AsyncClient, acreate_client

from bizhub.core.settings import settings

logger = logging.getLogger(__name__)

# Global Supabase client, opened by the application lifespan
supabase: AsyncClient | None = None


async def connect() -> AsyncClient | None:
    """Create the shared Supabase client if the project is configured."""
    global supabase

    if not settings.SUPABASE_URL or not settings.supabase_key:
        logger.warning("Supabase is not configured; database routes are disabled")
        return None

    supabase = await acreate_client(settings.SUPABASE_URL, settings.supabase_key)
    logger.info(f"Connected Supabase client for {settings.SUPABASE_URL}")
    return supabase


async def disconnect() -> None:
    global supabase
    supabase = None


async def get_db() -> AsyncClient:
    """Database dependency for FastAPI dependency injection."""
    if supabase is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Supabase not configured",
        )
    return supabase
