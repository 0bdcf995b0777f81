# bizhub/domains/team/routes.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from supabase import AsyncClient

from bizhub.core.database import get_db
from bizhub.domains.auth.dependencies import get_current_profile
from bizhub.domains.auth.models import Profile
from bizhub.domains.team.models import (
    AddMemberRequest,
    ChangeRoleRequest,
    TeamMemberResponse,
)
from bizhub.domains.team.service import TeamService
from bizhub.shared.permissions.context import PermissionContext
from bizhub.shared.permissions.dependencies import (
    get_role_registry,
    require_permission,
    require_user_manager,
)
from bizhub.shared.permissions.registry import RoleRegistry

router = APIRouter(prefix="/team", tags=["Team"])


@router.get(
    "",
    response_model=List[TeamMemberResponse],
    operation_id="getTeamMembers",
)
async def get_team_members(
    context: PermissionContext = Depends(require_permission("read", "team")),
    registry: RoleRegistry = Depends(get_role_registry),
    db: AsyncClient = Depends(get_db),
) -> List[TeamMemberResponse]:
    service = TeamService(db, registry)
    return await service.list_members()


@router.post(
    "",
    response_model=TeamMemberResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="addTeamMember",
)
async def add_team_member(
    request: AddMemberRequest,
    context: PermissionContext = Depends(require_user_manager()),
    profile: Profile = Depends(get_current_profile),
    registry: RoleRegistry = Depends(get_role_registry),
    db: AsyncClient = Depends(get_db),
) -> TeamMemberResponse:
    """
    Create an account for a new team member in the caller's organization.

    Restricted to administrators; the role must be a built-in or custom role.
    """
    service = TeamService(db, registry)
    return await service.add_member(request, profile.organization_id)


@router.patch(
    "/{profile_id}/role",
    response_model=TeamMemberResponse,
    operation_id="changeMemberRole",
)
async def change_member_role(
    profile_id: UUID,
    request: ChangeRoleRequest,
    context: PermissionContext = Depends(require_user_manager()),
    registry: RoleRegistry = Depends(get_role_registry),
    db: AsyncClient = Depends(get_db),
) -> TeamMemberResponse:
    """
    Assign a built-in or custom role to a team member.

    Restricted to administrators; role assignment is never granted through
    custom role permissions.
    """
    service = TeamService(db, registry)
    return await service.change_role(str(profile_id), request.role)


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="removeMember",
)
async def remove_member(
    profile_id: UUID,
    context: PermissionContext = Depends(require_user_manager()),
    profile: Profile = Depends(get_current_profile),
    registry: RoleRegistry = Depends(get_role_registry),
    db: AsyncClient = Depends(get_db),
) -> None:
    """
    Remove a team member's profile.

    Business rules:
    - Cannot remove yourself
    """
    service = TeamService(db, registry)
    await service.remove_member(str(profile_id), profile.id)
