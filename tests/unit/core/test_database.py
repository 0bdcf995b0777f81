"""
Tests for the Supabase client lifecycle.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi import HTTPException

from bizhub.core import database


@pytest.fixture(autouse=True)
def reset_client():
    yield
    database.supabase = None


class TestDatabase:
    @pytest.mark.asyncio
    async def test_get_db_without_client(self):
        database.supabase = None

        with pytest.raises(HTTPException) as exc_info:
            await database.get_db()

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Supabase not configured"

    @pytest.mark.asyncio
    async def test_connect_without_configuration(self):
        with patch.object(database.settings, "SUPABASE_URL", None):
            assert await database.connect() is None

        assert database.supabase is None

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self):
        client = Mock()
        with (
            patch.object(database.settings, "SUPABASE_URL", "https://x.supabase.co"),
            patch.object(database.settings, "SUPABASE_SERVICE_ROLE_KEY", "service-key"),
            patch(
                "bizhub.core.database.acreate_client", AsyncMock(return_value=client)
            ) as mock_create,
        ):
            await database.connect()

        mock_create.assert_awaited_once_with("https://x.supabase.co", "service-key")
        assert await database.get_db() is client

        await database.disconnect()
        assert database.supabase is None
