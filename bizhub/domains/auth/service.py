from bizhub.domains.auth.models import Profile, PublicProfile, SessionState
from bizhub.domains.navigation.service import build_navigation
from bizhub.shared.permissions.context import PermissionContext
from bizhub.shared.permissions.evaluator import PermissionEvaluator, normalize_role
from bizhub.shared.permissions.registry import RoleRegistry


class SessionService:
    """Service for session-related operations"""

    def __init__(self, registry: RoleRegistry):
        self.registry = registry

    def build_context(self, profile: Profile) -> PermissionContext:
        return PermissionContext(
            normalize_role(profile.role), PermissionEvaluator(self.registry)
        )

    def get_session_state(self, profile: Profile) -> SessionState:
        """
        Get the session state the client caches until its next refresh.

        A role change made by an administrator shows up on the next call; the
        state is not pushed to open sessions.

        Args:
            profile: User's profile row

        Returns:
            SessionState with user info, role, capabilities and navigation
        """
        context = self.build_context(profile)
        role = self.registry.get(context.role) if context.role else None

        return SessionState(
            user=PublicProfile.from_profile(profile),
            user_email=profile.email,
            organization_id=profile.organization_id,
            role=context.role,
            role_label=role.label if role else None,
            can_manage_users=context.can_manage_users,
            capabilities=context.capabilities(),
            navigation=build_navigation(context),
        )
