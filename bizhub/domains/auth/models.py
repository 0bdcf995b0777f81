# bizhub/domains/auth/models.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from bizhub.domains.navigation.models import NavGroup


class Profile(BaseModel):
    """Row of the ``profiles`` table."""

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    organization_id: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(
            id=row["id"],
            email=row.get("email"),
            full_name=row.get("full_name"),
            avatar_url=row.get("avatar_url"),
            organization_id=row.get("organization_id"),
            role=row.get("role"),
        )


class PublicProfile(BaseModel):
    id: str
    name: str

    @classmethod
    def from_profile(cls, profile: Profile) -> "PublicProfile":
        email = profile.email or ""
        return cls(id=profile.id, name=profile.full_name or email.split("@")[0] or "User")


class SessionState(BaseModel):
    user: PublicProfile
    user_email: Optional[str]
    organization_id: Optional[str]
    role: Optional[str]
    role_label: Optional[str]
    can_manage_users: bool
    capabilities: Dict[str, List[str]]
    navigation: List[NavGroup]
