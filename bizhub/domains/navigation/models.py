# bizhub/domains/navigation/models.py
from typing import List, Optional

from pydantic import BaseModel, Field


class NavPermission(BaseModel):
    action: str
    resource: str


class NavItem(BaseModel):
    title: str
    url: str
    permission: Optional[NavPermission] = None
    items: List["NavItem"] = Field(default_factory=list)


class NavGroup(BaseModel):
    id: str
    items: List[NavItem]
