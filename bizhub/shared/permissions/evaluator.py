import logging
from typing import Iterable, Optional

from bizhub.core.settings import settings

from .catalog import ACTION_IDS
from .grants import ExactGrant, GlobalGrant, ResourceWildcardGrant
from .registry import RoleRegistry, default_registry

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

# Legacy grant name that predates the create/update split
LEGACY_WRITE_ACTION = "write"
LEGACY_WRITE_COVERS = frozenset({"create", "update"})


def normalize_role(role: object) -> Optional[str]:
    """Lowercase and trim a role string; anything else normalizes to None."""
    if not isinstance(role, str):
        return None
    normalized = role.strip().lower()
    return normalized or None


def _normalize_term(term: object) -> str:
    """Empty and non-string terms become "", which no exact grant matches."""
    if not isinstance(term, str):
        return ""
    return term.strip().lower()


class PermissionEvaluator:
    """
    Decides whether a role may perform an action on a resource.

    Evaluation never raises. A missing or unknown role is a deny; an empty
    action or resource can only be matched by a wildcard grant.
    """

    def __init__(self, registry: Optional[RoleRegistry] = None):
        self.registry = registry if registry is not None else default_registry()

    def allows(self, role: object, action: object, resource: object) -> bool:
        """
        Check if a role may perform ``action`` on ``resource``.

        Precedence, first match wins: global wildcard, resource wildcard,
        exact grant, then the legacy ``resource:write`` grant for create and
        update.

        Args:
            role: The principal's role string (any case)
            action: Requested action, e.g. "read"
            resource: Requested resource, e.g. "clients"

        Returns:
            True if the role has the permission, False otherwise
        """
        allowed, reason = self._decide(role, action, resource)
        if settings.RBAC_TRACE:
            logger.debug(
                f"Permission {'granted' if allowed else 'denied'}: role={role!r} "
                f"action={action!r} resource={resource!r} ({reason})"
            )
        return allowed

    def _decide(self, role: object, action: object, resource: object) -> tuple[bool, str]:
        slug = normalize_role(role)
        if slug is None:
            return False, "no role"

        definition = self.registry.get(slug)
        if definition is None:
            return False, f"unknown role {slug}"

        action_id = _normalize_term(action)
        resource_id = _normalize_term(resource)
        grants = definition.grants
        if GlobalGrant() in grants:
            return True, "global wildcard"
        if ResourceWildcardGrant(resource_id) in grants:
            return True, f"{resource_id}:*"
        if ExactGrant(resource_id, action_id) in grants:
            return True, f"{resource_id}:{action_id}"
        if (
            action_id in LEGACY_WRITE_COVERS
            and ExactGrant(resource_id, LEGACY_WRITE_ACTION) in grants
        ):
            return True, f"legacy {resource_id}:{LEGACY_WRITE_ACTION}"
        return False, "no matching grant"

    def can_manage_users(self, role: object) -> bool:
        """User and role management is reserved to admins, never delegated."""
        return normalize_role(role) == ADMIN_ROLE

    def granted_actions(
        self, role: object, resource: str, actions: Iterable[str] = ACTION_IDS
    ) -> list[str]:
        """Subset of ``actions`` the role may perform on ``resource``."""
        return [action for action in actions if self.allows(role, action, resource)]


_default_evaluator = PermissionEvaluator()


def allows(role: object, action: object, resource: object) -> bool:
    """Evaluate against the built-in roles."""
    return _default_evaluator.allows(role, action, resource)


def can_manage_users(role: object) -> bool:
    return _default_evaluator.can_manage_users(role)
