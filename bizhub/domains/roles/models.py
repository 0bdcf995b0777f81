# bizhub/domains/roles/models.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from bizhub.shared.permissions.catalog import ActionInfo, ResourceInfo
from bizhub.shared.permissions.grants import format_grants
from bizhub.shared.permissions.registry import RoleDefinition


class CustomRoleCreate(BaseModel):
    name: str
    slug: Optional[str] = Field(
        None, description="Defaults to the name, lowercased and hyphenated"
    )
    description: str = ""
    permissions: List[str] = Field(default_factory=list)


class CustomRoleUpdate(BaseModel):
    """Full replacement of a role's editable fields."""

    name: str
    slug: Optional[str] = None
    description: str = ""
    permissions: List[str] = Field(default_factory=list)


class CustomRoleResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    permissions: List[str]
    is_system: bool
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "CustomRoleResponse":
        return cls(
            id=str(row["id"]),
            name=row["name"],
            slug=row["slug"],
            description=row.get("description") or "",
            permissions=list(row.get("permissions") or []),
            is_system=bool(row.get("is_system")),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


class RoleResponse(BaseModel):
    """A role as offered for assignment, built-in or custom."""

    slug: str
    label: str
    description: str
    permissions: List[str]
    is_system: bool
    id: Optional[str] = None

    @classmethod
    def from_definition(cls, role: RoleDefinition) -> "RoleResponse":
        return cls(
            slug=role.slug,
            label=role.label,
            description=role.description,
            permissions=format_grants(role.grants),
            is_system=role.is_system,
            id=role.id,
        )


class PermissionCatalogResponse(BaseModel):
    actions: List[ActionInfo]
    groups: Dict[str, List[ResourceInfo]]


class PermissionToggleRequest(BaseModel):
    permissions: List[str]
    resource: str = ""
    action: str


class PermissionToggleResponse(BaseModel):
    permissions: List[str]
