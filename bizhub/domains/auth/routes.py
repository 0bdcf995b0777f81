# bizhub/domains/auth/routes.py
from fastapi import APIRouter, Depends

from bizhub.domains.auth.dependencies import get_current_profile
from bizhub.domains.auth.models import Profile, SessionState
from bizhub.domains.auth.service import SessionService
from bizhub.shared.permissions.dependencies import get_role_registry
from bizhub.shared.permissions.registry import RoleRegistry

# Add a prefix and tag to group this route clearly in OpenAPI
router = APIRouter(prefix="/session", tags=["Sessions"])


@router.get(
    "",
    response_model=SessionState,
    operation_id="getSessionState",
)
async def get_session_state(
    profile: Profile = Depends(get_current_profile),
    registry: RoleRegistry = Depends(get_role_registry),
) -> SessionState:
    service = SessionService(registry)
    return service.get_session_state(profile)
