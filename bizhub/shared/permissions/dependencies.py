from typing import Awaitable, Callable

from fastapi import Depends, HTTPException, status
from supabase import AsyncClient

from bizhub.core.database import get_db
from bizhub.domains.auth.dependencies import get_current_profile
from bizhub.domains.auth.models import Profile
from bizhub.domains.roles.service import CustomRoleService

from .context import PermissionContext
from .evaluator import PermissionEvaluator, normalize_role
from .registry import RoleRegistry


async def get_role_registry(db: AsyncClient = Depends(get_db)) -> RoleRegistry:
    """Built-in and organization-defined roles, loaded once per request."""
    return await CustomRoleService(db).build_registry()


async def get_permission_context(
    profile: Profile = Depends(get_current_profile),
    registry: RoleRegistry = Depends(get_role_registry),
) -> PermissionContext:
    """Permission context of the authenticated principal."""
    return PermissionContext(normalize_role(profile.role), PermissionEvaluator(registry))


def require_permission(
    action: str, resource: str
) -> Callable[..., Awaitable[PermissionContext]]:
    """
    Dependency factory for role-based authorization.

    Creates a dependency that validates the current user's role allows
    ``action`` on ``resource``.

    Args:
        action: The action the endpoint performs, e.g. "update"
        resource: The resource it acts on, e.g. "roles"

    Returns:
        Async dependency function that validates permission and returns the
        permission context
    """

    async def check_permission(
        context: PermissionContext = Depends(get_permission_context),
    ) -> PermissionContext:
        if not context.check(action, resource):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions: {resource}:{action} required",
            )
        return context

    return check_permission


def require_user_manager() -> Callable[..., Awaitable[PermissionContext]]:
    """Dependency factory for user and role assignment endpoints."""

    async def check_user_manager(
        context: PermissionContext = Depends(get_permission_context),
    ) -> PermissionContext:
        if not context.can_manage_users:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only administrators can manage users",
            )
        return context

    return check_user_manager
