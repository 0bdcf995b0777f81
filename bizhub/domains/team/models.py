# bizhub/domains/team/models.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class TeamMemberResponse(BaseModel):
    id: str
    email: Optional[str]
    full_name: Optional[str]
    avatar_url: Optional[str]
    role: Optional[str]
    role_label: Optional[str]

    @classmethod
    def from_row(
        cls, row: Dict[str, Any], role_label: Optional[str] = None
    ) -> "TeamMemberResponse":
        return cls(
            id=str(row["id"]),
            email=row.get("email"),
            full_name=row.get("full_name"),
            avatar_url=row.get("avatar_url"),
            role=row.get("role"),
            role_label=role_label,
        )


class ChangeRoleRequest(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Role must not be empty")
        return v.strip().lower()


class AddMemberRequest(BaseModel):
    """New team member account, created with the given role."""

    email: str
    password: str = Field(min_length=6)
    full_name: str
    role: str

    @field_validator("email", "full_name")
    @classmethod
    def validate_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field must not be empty")
        return v.strip()

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Role must not be empty")
        return v.strip().lower()
