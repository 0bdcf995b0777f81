"""
Permission matrix editing.

Custom roles are written back as a full permission list; these helpers
compute the next list when an administrator toggles one matrix cell.
"""

from typing import Sequence

from .evaluator import LEGACY_WRITE_ACTION, LEGACY_WRITE_COVERS
from .grants import SEPARATOR, WILDCARD, parse_grant


class GrantLockedError(ValueError):
    """Raised when editing individual grants of a role holding ``*``."""

    def __init__(self) -> None:
        super().__init__(
            "This role has full access (*). Remove '*' to manage individual "
            "permissions."
        )


def _cell(resource: str, action: str) -> str:
    if action == WILDCARD:
        return f"{resource}{SEPARATOR}{WILDCARD}"
    return f"{resource}{SEPARATOR}{action}"


def is_granted(grants: Sequence[str], resource: str, action: str) -> bool:
    """Checkbox state of one matrix cell."""
    if WILDCARD in grants:
        return True
    if _cell(resource, action) in grants or _cell(resource, WILDCARD) in grants:
        return True
    return action in LEGACY_WRITE_COVERS and _cell(resource, LEGACY_WRITE_ACTION) in grants


def toggle_grant(grants: Sequence[str], resource: str, action: str) -> list[str]:
    """
    Compute the grant list after toggling one cell.

    Args:
        grants: Current grant strings of the role
        resource: Resource id, ignored when toggling the global wildcard
        action: Action id, or "*" for the resource wildcard

    Returns:
        The new grant list

    Raises:
        GrantLockedError: If the role holds "*" and a narrower cell is toggled
        InvalidGrantError: If the cell does not form a valid grant
    """
    current = list(grants)
    resource = resource.strip().lower()
    action = action.strip().lower()
    global_toggle = action == WILDCARD and not resource

    if WILDCARD in current and not global_toggle:
        raise GrantLockedError()

    if global_toggle:
        return [] if WILDCARD in current else [WILDCARD]

    permission = str(parse_grant(_cell(resource, action)))
    prefix = f"{resource}{SEPARATOR}"
    resource_wildcard = _cell(resource, WILDCARD)

    if action == WILDCARD:
        had_wildcard = resource_wildcard in current
        current = [g for g in current if not g.startswith(prefix)]
        if not had_wildcard:
            current.append(resource_wildcard)
        return current

    if permission in current:
        return [g for g in current if g != permission]

    current = [g for g in current if g != resource_wildcard]
    current.append(permission)
    return current
