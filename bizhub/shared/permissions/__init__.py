"""
Shared permission system for role-based access control.

Roles hold ``resource:action`` grants (``resource:*`` and ``*`` are the
wildcard forms). The evaluator here is the API's convenience layer; the
database's row-level policies remain the authority and must agree with it.

Usage:
    from bizhub.shared.permissions.dependencies import require_permission

    @router.get("/clients")
    async def list_clients(
        context: PermissionContext = Depends(require_permission("read", "clients"))
    ):
        pass
"""

from .context import PermissionContext, PermissionContextHolder
from .evaluator import PermissionEvaluator, allows, can_manage_users, normalize_role
from .grants import (
    ExactGrant,
    GlobalGrant,
    Grant,
    InvalidGrantError,
    ResourceWildcardGrant,
    parse_grant,
)
from .registry import BUILTIN_ROLES, RoleDefinition, RoleRegistry, default_registry

__all__ = [
    "BUILTIN_ROLES",
    "ExactGrant",
    "GlobalGrant",
    "Grant",
    "InvalidGrantError",
    "PermissionContext",
    "PermissionContextHolder",
    "PermissionEvaluator",
    "ResourceWildcardGrant",
    "RoleDefinition",
    "RoleRegistry",
    "allows",
    "can_manage_users",
    "default_registry",
    "normalize_role",
    "parse_grant",
]
