# bizhub/domains/navigation/routes.py
from typing import List

from fastapi import APIRouter, Depends

from bizhub.domains.navigation.models import NavGroup
from bizhub.domains.navigation.service import build_navigation
from bizhub.shared.permissions.context import PermissionContext
from bizhub.shared.permissions.dependencies import get_permission_context

router = APIRouter(prefix="/navigation", tags=["Navigation"])


@router.get(
    "",
    response_model=List[NavGroup],
    operation_id="getNavigation",
)
async def get_navigation(
    context: PermissionContext = Depends(get_permission_context),
) -> List[NavGroup]:
    """
    Sidebar entries the current user may open.

    Entries failing their permission are omitted rather than disabled.
    """
    return build_navigation(context)
