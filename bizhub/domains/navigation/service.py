"""
Navigation filtering.

Entries the principal may not use are removed from the tree, not disabled.
"""

from typing import Callable, List

from bizhub.domains.navigation.models import NavGroup, NavItem, NavPermission
from bizhub.shared.permissions.context import PermissionContext

PermissionCheck = Callable[[str, str], bool]


def _item(title: str, url: str, resource: str = "", items=None) -> NavItem:
    return NavItem(
        title=title,
        url=url,
        permission=NavPermission(action="read", resource=resource) if resource else None,
        items=items or [],
    )


SIDEBAR: List[NavGroup] = [
    NavGroup(
        id="platform",
        items=[
            _item("Dashboard", "/dashboard/overview", "dashboard"),
            _item("My Tasks", "/dashboard/tasks/assigned", "tasks"),
            _item("Notifications", "/dashboard/notifications"),
        ],
    ),
    NavGroup(
        id="operations",
        items=[
            _item("Clients", "/dashboard/clients", "clients"),
            _item("Projects", "/dashboard/projects", "projects"),
            _item("Finances", "/dashboard/finances", "finances"),
            _item("Credentials", "/dashboard/credentials", "credentials"),
        ],
    ),
    NavGroup(
        id="collaboration",
        items=[
            _item("Team Chat", "/dashboard/chat", "chat"),
            _item("Direct Messages", "/dashboard/chat/dms", "chat"),
            _item("Team", "/dashboard/team", "team"),
        ],
    ),
    NavGroup(
        id="configuration",
        items=[
            _item(
                "Settings",
                "#",
                items=[
                    _item("Account", "/dashboard/account"),
                    _item("Organization", "/dashboard/organization", "organizations"),
                    _item("Roles & Permissions", "/dashboard/team?tab=roles", "roles"),
                    _item("Audit Logs", "/dashboard/audit-logs", "audit_logs"),
                ],
            )
        ],
    ),
]


def filter_navigation(items: List[NavItem], check: PermissionCheck) -> List[NavItem]:
    """
    Drop entries whose permission check fails, recursing into children.

    A parent without its own permission that loses all of its children is
    dropped as well.
    """
    visible = []
    for item in items:
        if item.permission and not check(item.permission.action, item.permission.resource):
            continue

        children = filter_navigation(item.items, check)
        if item.items and not children and item.permission is None:
            continue

        visible.append(item.model_copy(update={"items": children}))
    return visible


def build_navigation(
    context: PermissionContext, groups: List[NavGroup] = SIDEBAR
) -> List[NavGroup]:
    """Sidebar groups visible to the principal; empty groups are omitted."""
    result = []
    for group in groups:
        items = filter_navigation(group.items, context.check)
        if items:
            result.append(NavGroup(id=group.id, items=items))
    return result
