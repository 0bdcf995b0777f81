"""
Tests for shared permissions dependencies (require_permission and friends).
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException

from bizhub.shared.permissions.context import PermissionContext
from bizhub.shared.permissions.dependencies import (
    get_permission_context,
    get_role_registry,
    require_permission,
    require_user_manager,
)
from bizhub.shared.permissions.grants import parse_grants
from bizhub.shared.permissions.registry import RoleDefinition, default_registry
from tests.fixtures.role_fixtures import make_profile


def reviewer_registry():
    return default_registry().merged_with(
        [
            RoleDefinition(
                slug="reviewer",
                label="Reviewer",
                description="",
                grants=parse_grants(["tasks:read", "tasks:update"]),
                is_system=False,
            )
        ]
    )


class TestGetPermissionContext:
    @pytest.mark.asyncio
    async def test_builds_context_from_profile_role(self):
        context = await get_permission_context(
            profile=make_profile("Employee"), registry=default_registry()
        )

        assert context.role == "employee"
        assert context.check("read", "clients") is True

    @pytest.mark.asyncio
    async def test_custom_role_resolved_through_registry(self):
        context = await get_permission_context(
            profile=make_profile("reviewer"), registry=reviewer_registry()
        )

        assert context.check("update", "tasks") is True
        assert context.check("delete", "tasks") is False

    @pytest.mark.asyncio
    async def test_profile_without_role(self):
        context = await get_permission_context(
            profile=make_profile(None), registry=default_registry()
        )

        assert context.role is None
        assert context.check("read", "dashboard") is False

    @pytest.mark.asyncio
    async def test_get_role_registry_loads_custom_roles(self):
        with patch(
            "bizhub.shared.permissions.dependencies.CustomRoleService"
        ) as mock_service_class:
            mock_service_class.return_value.build_registry = AsyncMock(
                return_value=reviewer_registry()
            )
            db = object()

            registry = await get_role_registry(db=db)

        mock_service_class.assert_called_once_with(db)
        assert "reviewer" in registry


class TestRequirePermission:
    @pytest.mark.asyncio
    async def test_allowed_returns_context(self):
        context = PermissionContext("employee")
        dependency = require_permission("delete", "clients")

        result = await dependency(context=context)

        assert result is context

    @pytest.mark.asyncio
    async def test_denied_raises_403(self):
        dependency = require_permission("read", "roles")

        with pytest.raises(HTTPException) as exc_info:
            await dependency(context=PermissionContext("employee"))

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Insufficient permissions: roles:read required"

    @pytest.mark.asyncio
    async def test_unknown_role_is_denied(self):
        dependency = require_permission("read", "dashboard")

        with pytest.raises(HTTPException) as exc_info:
            await dependency(context=PermissionContext("deleted-role"))

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_passes_any_check(self):
        dependency = require_permission("delete", "audit_logs")
        context = PermissionContext("admin")

        assert await dependency(context=context) is context


class TestRequireUserManager:
    @pytest.mark.asyncio
    async def test_admin_allowed(self):
        context = PermissionContext("admin")

        assert await require_user_manager()(context=context) is context

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", ["employee", "client", None])
    async def test_non_admin_forbidden(self, role):
        with pytest.raises(HTTPException) as exc_info:
            await require_user_manager()(context=PermissionContext(role))

        assert exc_info.value.status_code == 403
