from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Optional

from .grants import Grant, parse_grants


@dataclass(frozen=True)
class RoleDefinition:
    """A named set of permission grants."""

    slug: str
    label: str
    description: str
    grants: frozenset[Grant] = field(default_factory=frozenset)
    is_system: bool = True
    id: Optional[str] = None


def _builtin(slug: str, label: str, description: str, grants: list[str]) -> RoleDefinition:
    return RoleDefinition(
        slug=slug, label=label, description=description, grants=parse_grants(grants)
    )


BUILTIN_ROLES: dict[str, RoleDefinition] = {
    "admin": _builtin(
        "admin",
        "Admin",
        "Full access to all resources and settings.",
        ["*"],
    ),
    "employee": _builtin(
        "employee",
        "Employee",
        "Can manage projects, tasks, clients, and chat. "
        "Cannot manage users or organization settings.",
        [
            "dashboard:read",
            "projects:*",
            "tasks:*",
            "deliverables:*",
            "proposals:*",
            "clients:*",
            "team:read",
            "chat:*",
            "credentials:*",
            "organizations:read",
        ],
    ),
    "client": _builtin(
        "client",
        "Client",
        "Can follow their projects and talk to the team.",
        [
            "dashboard:read",
            "projects:read",
            "tasks:read",
            "deliverables:read",
            "phases:read",
            "chat:*",
        ],
    ),
}


class RoleRegistry:
    """
    Lookup of role definitions by slug.

    Registries are immutable; ``merged_with`` returns a new registry so tests
    and requests can use their own role sets without touching shared state.
    """

    def __init__(self, roles: Mapping[str, RoleDefinition]):
        self._roles = {slug.lower(): role for slug, role in roles.items()}

    def get(self, slug: str) -> Optional[RoleDefinition]:
        return self._roles.get(slug)

    def __contains__(self, slug: object) -> bool:
        return slug in self._roles

    def __iter__(self) -> Iterator[RoleDefinition]:
        return iter(self._roles.values())

    def __len__(self) -> int:
        return len(self._roles)

    def slugs(self) -> list[str]:
        return list(self._roles)

    def roles(self) -> list[RoleDefinition]:
        return list(self._roles.values())

    def merged_with(self, extra: Iterable[RoleDefinition]) -> "RoleRegistry":
        """Add roles to a copy of this registry; existing slugs are kept."""
        roles = dict(self._roles)
        for role in extra:
            roles.setdefault(role.slug.lower(), role)
        return RoleRegistry(roles)


def default_registry() -> RoleRegistry:
    """Registry of the built-in roles."""
    return RoleRegistry(BUILTIN_ROLES)
