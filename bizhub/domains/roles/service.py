# bizhub/domains/roles/service.py
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, NoReturn, Optional, Tuple

from postgrest.exceptions import APIError
from supabase import AsyncClient

from bizhub.domains.roles.exceptions import (
    DuplicateRoleSlugError,
    InvalidRoleError,
    RoleNotFoundError,
    RolePersistenceError,
    SystemRoleDeletionError,
    SystemRoleSlugError,
)
from bizhub.domains.roles.models import (
    CustomRoleCreate,
    CustomRoleResponse,
    CustomRoleUpdate,
    RoleResponse,
)
from bizhub.shared.permissions.grants import (
    InvalidGrantError,
    format_grants,
    parse_grants,
    parse_stored_grants,
)
from bizhub.shared.permissions.registry import (
    RoleDefinition,
    RoleRegistry,
    default_registry,
)

logger = logging.getLogger(__name__)

TABLE = "custom_roles"
UNIQUE_VIOLATION = "23505"


def derive_slug(value: str) -> str:
    """
    Turn a role name or slug into its stored key.

    "Content Editor" -> "content-editor"; runs of whitespace collapse into a
    single hyphen.
    """
    return re.sub(r"\s+", "-", value.strip().lower())


def role_definition_from_row(row: Dict[str, Any]) -> RoleDefinition:
    slug = row["slug"]
    return RoleDefinition(
        slug=slug,
        label=row["name"],
        description=row.get("description") or "",
        grants=parse_stored_grants(row.get("permissions"), slug),
        is_system=bool(row.get("is_system")),
        id=str(row["id"]),
    )


def _validate(
    name: str, slug: Optional[str], permissions: List[str]
) -> Tuple[str, str, List[str]]:
    """
    Validate role input before it reaches the database.

    Returns:
        Trimmed name, derived slug and canonical permission strings

    Raises:
        InvalidRoleError: If name or slug is empty or a grant is malformed
    """
    clean_name = name.strip()
    clean_slug = derive_slug(slug if slug is not None else clean_name)
    if not clean_name or not clean_slug:
        raise InvalidRoleError()

    try:
        grants = parse_grants(permissions)
    except InvalidGrantError as e:
        raise InvalidRoleError(str(e))

    return clean_name, clean_slug, format_grants(grants)


def _raise_persistence_error(e: APIError, action: str) -> NoReturn:
    logger.error(f"Error {action} role: {e.message} (code={e.code})")
    if e.code == UNIQUE_VIOLATION:
        raise DuplicateRoleSlugError(f"Error {action} role: {e.message}")
    raise RolePersistenceError(f"Error {action} role: {e.message}")


class CustomRoleService:
    """Organization-defined roles stored in the ``custom_roles`` table."""

    def __init__(self, db: AsyncClient):
        self.db = db

    async def list_roles(self) -> List[CustomRoleResponse]:
        """
        Get all stored roles, system roles first, then by name.

        Returns:
            List of stored roles
        """
        try:
            response = (
                await self.db.table(TABLE)
                .select("*")
                .order("is_system", desc=True)
                .order("name")
                .execute()
            )
        except APIError as e:
            _raise_persistence_error(e, "fetching")

        return [CustomRoleResponse.from_row(row) for row in response.data or []]

    async def get_role(self, role_id: str) -> CustomRoleResponse:
        try:
            response = (
                await self.db.table(TABLE).select("*").eq("id", role_id).limit(1).execute()
            )
        except APIError as e:
            _raise_persistence_error(e, "fetching")

        if not response.data:
            raise RoleNotFoundError()
        return CustomRoleResponse.from_row(response.data[0])

    async def create_role(self, data: CustomRoleCreate) -> CustomRoleResponse:
        """
        Create an organization-defined role.

        Args:
            data: Name, optional slug, description and permission list

        Returns:
            The stored role

        Raises:
            InvalidRoleError: If validation fails (no database call is made)
            DuplicateRoleSlugError: If the slug is already taken
        """
        name, slug, permissions = _validate(data.name, data.slug, data.permissions)
        payload = {
            "name": name,
            "slug": slug,
            "description": data.description,
            "permissions": permissions,
            "is_system": False,
        }

        try:
            response = await self.db.table(TABLE).insert(payload).execute()
        except APIError as e:
            _raise_persistence_error(e, "creating")

        if not response.data:
            raise RolePersistenceError("Error creating role: no row returned")

        logger.info(f"Created role {slug} with {len(permissions)} permissions")
        return CustomRoleResponse.from_row(response.data[0])

    async def update_role(
        self, role_id: str, data: CustomRoleUpdate
    ) -> CustomRoleResponse:
        """
        Replace a role's name, description and permissions.

        The slug may only change for non-system roles, since system slugs are
        stored on profiles and referenced by code.

        Raises:
            RoleNotFoundError: If the role does not exist
            SystemRoleSlugError: If a system role's slug would change
            InvalidRoleError: If validation fails
        """
        existing = await self.get_role(role_id)
        name, slug, permissions = _validate(
            data.name, data.slug if data.slug is not None else existing.slug, data.permissions
        )
        if data.slug is None:
            slug = existing.slug

        if existing.is_system and slug != existing.slug:
            raise SystemRoleSlugError()

        payload: Dict[str, Any] = {
            "name": name,
            "description": data.description,
            "permissions": permissions,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        if not existing.is_system:
            payload["slug"] = slug

        try:
            response = (
                await self.db.table(TABLE).update(payload).eq("id", role_id).execute()
            )
        except APIError as e:
            _raise_persistence_error(e, "updating")

        if not response.data:
            raise RoleNotFoundError()

        logger.info(f"Updated role {slug}")
        return CustomRoleResponse.from_row(response.data[0])

    async def delete_role(self, role_id: str) -> None:
        """
        Delete a non-system role.

        Principals holding the role keep the now unknown slug and are denied
        everything until reassigned.

        Raises:
            RoleNotFoundError: If the role does not exist
            SystemRoleDeletionError: If the role is a system role
        """
        role = await self.get_role(role_id)
        if role.is_system:
            raise SystemRoleDeletionError()

        try:
            response = (
                await self.db.table(TABLE)
                .delete()
                .eq("id", role_id)
                .eq("is_system", False)
                .execute()
            )
        except APIError as e:
            _raise_persistence_error(e, "deleting")

        if not response.data:
            raise RoleNotFoundError()

        logger.info(f"Deleted role {role.slug}")

    async def build_registry(
        self, base: Optional[RoleRegistry] = None
    ) -> RoleRegistry:
        """Built-in roles merged with the stored ones; built-ins win on slug."""
        stored = await self.list_roles()
        registry = base if base is not None else default_registry()
        return registry.merged_with(
            role_definition_from_row(role.model_dump()) for role in stored
        )

    async def list_all_roles(
        self, base: Optional[RoleRegistry] = None
    ) -> List[RoleResponse]:
        """Built-in roles followed by stored roles, one entry per slug."""
        registry = await self.build_registry(base)
        return [RoleResponse.from_definition(role) for role in registry]
