# bizhub/domains/roles/routes.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from supabase import AsyncClient

from bizhub.core.database import get_db
from bizhub.domains.roles.exceptions import InvalidRoleError
from bizhub.domains.roles.models import (
    CustomRoleCreate,
    CustomRoleResponse,
    CustomRoleUpdate,
    PermissionCatalogResponse,
    PermissionToggleRequest,
    PermissionToggleResponse,
    RoleResponse,
)
from bizhub.domains.roles.service import CustomRoleService
from bizhub.shared.permissions.catalog import ACTIONS, resources_by_group
from bizhub.shared.permissions.context import PermissionContext
from bizhub.shared.permissions.dependencies import require_permission
from bizhub.shared.permissions.editor import GrantLockedError, toggle_grant
from bizhub.shared.permissions.grants import InvalidGrantError

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get(
    "",
    response_model=List[RoleResponse],
    operation_id="listRoles",
)
async def list_roles(
    context: PermissionContext = Depends(require_permission("read", "roles")),
    db: AsyncClient = Depends(get_db),
) -> List[RoleResponse]:
    """
    All roles that can be assigned: built-in roles followed by the
    organization's custom roles.
    """
    service = CustomRoleService(db)
    return await service.list_all_roles()


@router.get(
    "/catalog",
    response_model=PermissionCatalogResponse,
    operation_id="getPermissionCatalog",
)
async def get_permission_catalog(
    context: PermissionContext = Depends(require_permission("read", "roles")),
) -> PermissionCatalogResponse:
    """Resources (grouped for display) and actions of the permission matrix."""
    return PermissionCatalogResponse(actions=ACTIONS, groups=resources_by_group())


@router.post(
    "/permissions/toggle",
    response_model=PermissionToggleResponse,
    operation_id="togglePermission",
)
async def toggle_permission(
    request: PermissionToggleRequest,
    context: PermissionContext = Depends(require_permission("update", "roles")),
) -> PermissionToggleResponse:
    """
    Compute a role's permission list after toggling one matrix cell.

    Nothing is stored; the client saves the full list with the role.
    """
    try:
        permissions = toggle_grant(request.permissions, request.resource, request.action)
    except (GrantLockedError, InvalidGrantError) as e:
        raise InvalidRoleError(str(e))
    return PermissionToggleResponse(permissions=permissions)


@router.get(
    "/custom",
    response_model=List[CustomRoleResponse],
    operation_id="listCustomRoles",
)
async def list_custom_roles(
    context: PermissionContext = Depends(require_permission("read", "roles")),
    db: AsyncClient = Depends(get_db),
) -> List[CustomRoleResponse]:
    service = CustomRoleService(db)
    return await service.list_roles()


@router.post(
    "/custom",
    response_model=CustomRoleResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createCustomRole",
)
async def create_custom_role(
    data: CustomRoleCreate,
    context: PermissionContext = Depends(require_permission("create", "roles")),
    db: AsyncClient = Depends(get_db),
) -> CustomRoleResponse:
    """
    Create an organization-defined role.

    The slug defaults to the name, lowercased with whitespace replaced by
    hyphens. Duplicate slugs are rejected with 409.
    """
    service = CustomRoleService(db)
    return await service.create_role(data)


@router.patch(
    "/custom/{role_id}",
    response_model=CustomRoleResponse,
    operation_id="updateCustomRole",
)
async def update_custom_role(
    role_id: UUID,
    data: CustomRoleUpdate,
    context: PermissionContext = Depends(require_permission("update", "roles")),
    db: AsyncClient = Depends(get_db),
) -> CustomRoleResponse:
    """
    Replace a role's name, description and permissions.

    Business rules:
    - The permission list is replaced as a whole
    - System roles keep their slug
    """
    service = CustomRoleService(db)
    return await service.update_role(str(role_id), data)


@router.delete(
    "/custom/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="deleteCustomRole",
)
async def delete_custom_role(
    role_id: UUID,
    context: PermissionContext = Depends(require_permission("delete", "roles")),
    db: AsyncClient = Depends(get_db),
) -> None:
    """
    Delete a custom role. System roles cannot be deleted.

    Users still assigned the role lose all permissions until reassigned.
    """
    service = CustomRoleService(db)
    await service.delete_role(str(role_id))
