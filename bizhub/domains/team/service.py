# bizhub/domains/team/service.py
import logging
from typing import List, Optional

from postgrest.exceptions import APIError
from supabase import AsyncClient, AuthApiError, AuthError

from bizhub.domains.team.models import AddMemberRequest, TeamMemberResponse
from bizhub.shared.exceptions import (
    InvalidDataError,
    PersistenceError,
    ProfileNotFoundError,
)
from bizhub.shared.permissions.evaluator import normalize_role
from bizhub.shared.permissions.registry import RoleRegistry

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "id, email, full_name, avatar_url, role"


class TeamService:
    def __init__(self, db: AsyncClient, registry: RoleRegistry):
        self.db = db
        self.registry = registry

    def _role_label(self, role: Optional[str]) -> Optional[str]:
        slug = normalize_role(role)
        definition = self.registry.get(slug) if slug else None
        return definition.label if definition else None

    async def list_members(self) -> List[TeamMemberResponse]:
        """
        Get all team members visible to the caller.

        Row-level policies on ``profiles`` decide which rows come back.
        """
        try:
            response = (
                await self.db.table("profiles")
                .select(PROFILE_COLUMNS)
                .order("role", desc=True)
                .execute()
            )
        except APIError as e:
            logger.error(f"Error fetching team members: {e.message}")
            raise PersistenceError(f"Error fetching data: {e.message}")

        return [
            TeamMemberResponse.from_row(row, self._role_label(row.get("role")))
            for row in response.data or []
        ]

    async def add_member(
        self, data: AddMemberRequest, organization_id: Optional[str]
    ) -> TeamMemberResponse:
        """
        Create a team member account in the caller's organization.

        The account is created through the auth admin API; the ``profiles``
        row is written by the database's sign-up trigger from the user
        metadata, so the member shows up once that trigger has run.

        Args:
            data: Email, password, full name and role of the new member
            organization_id: Organization the member joins

        Returns:
            The new member

        Raises:
            InvalidDataError: If the role is unknown (no auth call is made) or
                the auth service rejects the account
            PersistenceError: If the auth service fails
        """
        if data.role not in self.registry:
            raise InvalidDataError(f"Unknown role: {data.role}")

        try:
            response = await self.db.auth.admin.create_user(
                {
                    "email": data.email,
                    "password": data.password,
                    "email_confirm": True,
                    "user_metadata": {
                        "full_name": data.full_name,
                        "role": data.role,
                        "organization_id": organization_id,
                    },
                }
            )
        except AuthApiError as e:
            logger.error(f"Error creating team member {data.email}: {e.message}")
            if e.status and e.status < 500:
                raise InvalidDataError(f"Error creating team member: {e.message}")
            raise PersistenceError(f"Error creating team member: {e.message}")
        except AuthError as e:
            logger.error(f"Error creating team member {data.email}: {e.message}")
            raise PersistenceError(f"Error creating team member: {e.message}")

        user = response.user
        if user is None:
            raise PersistenceError("Error creating team member: no user returned")

        logger.info(f"Created team member {user.id} with role {data.role}")
        return TeamMemberResponse(
            id=str(user.id),
            email=user.email,
            full_name=data.full_name,
            avatar_url=None,
            role=data.role,
            role_label=self._role_label(data.role),
        )

    async def change_role(self, profile_id: str, new_role: str) -> TeamMemberResponse:
        """
        Assign a different role to a team member.

        The member's open sessions pick up the change on their next session
        fetch.

        Args:
            profile_id: Profile to update
            new_role: Slug of a built-in or custom role

        Returns:
            Updated member

        Raises:
            InvalidDataError: If the role is unknown (no database call is made)
            ProfileNotFoundError: If no profile row was updated
        """
        if new_role not in self.registry:
            raise InvalidDataError(f"Unknown role: {new_role}")

        try:
            response = (
                await self.db.table("profiles")
                .update({"role": new_role})
                .eq("id", profile_id)
                .execute()
            )
        except APIError as e:
            logger.error(f"Error updating role of {profile_id}: {e.message}")
            raise PersistenceError(f"Error updating role: {e.message}")

        if not response.data:
            raise ProfileNotFoundError(
                "No profile was updated. You might not have permission or the "
                "user does not exist."
            )

        logger.info(f"Profile {profile_id} assigned role {new_role}")
        row = response.data[0]
        return TeamMemberResponse.from_row(row, self._role_label(row.get("role")))

    async def remove_member(self, profile_id: str, requester_id: str) -> None:
        """
        Delete a team member's profile.

        Raises:
            InvalidDataError: If requesters try to remove themselves
            ProfileNotFoundError: If no profile row was deleted
        """
        if profile_id == requester_id:
            raise InvalidDataError("You cannot delete your own account")

        try:
            response = (
                await self.db.table("profiles").delete().eq("id", profile_id).execute()
            )
        except APIError as e:
            logger.error(f"Error deleting profile {profile_id}: {e.message}")
            raise PersistenceError(f"Error deleting profile: {e.message}")

        if not response.data:
            raise ProfileNotFoundError(
                "No profile was deleted. You might not have permission."
            )

        logger.info(f"Profile {profile_id} removed by {requester_id}")
