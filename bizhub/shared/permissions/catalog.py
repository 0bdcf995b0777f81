"""Resources and actions offered by the role permission matrix."""

from pydantic import BaseModel


class ResourceInfo(BaseModel):
    id: str
    label: str
    group: str


class ActionInfo(BaseModel):
    id: str
    label: str


ACTIONS: list[ActionInfo] = [
    ActionInfo(id="read", label="Read"),
    ActionInfo(id="create", label="Create"),
    ActionInfo(id="update", label="Update"),
    ActionInfo(id="delete", label="Delete"),
    ActionInfo(id="*", label="All"),
]

# Concrete actions only; "*" is a grant form, never a requested action
ACTION_IDS: tuple[str, ...] = tuple(a.id for a in ACTIONS if a.id != "*")

RESOURCES: list[ResourceInfo] = [
    ResourceInfo(id="dashboard", label="Dashboard", group="Overview"),
    ResourceInfo(id="clients", label="Clients", group="Operations"),
    ResourceInfo(id="projects", label="Projects", group="Operations"),
    ResourceInfo(id="phases", label="Phases", group="Operations"),
    ResourceInfo(id="deliverables", label="Deliverables", group="Operations"),
    ResourceInfo(id="proposals", label="Proposals", group="Operations"),
    ResourceInfo(id="tasks", label="Tasks", group="Operations"),
    ResourceInfo(id="invoices", label="Invoices", group="Finance"),
    ResourceInfo(id="finances", label="Finances", group="Finance"),
    ResourceInfo(id="credentials", label="Credentials", group="Operations"),
    ResourceInfo(id="chat", label="Chat", group="Collaboration"),
    ResourceInfo(id="team", label="Team", group="Collaboration"),
    ResourceInfo(id="organizations", label="Organization", group="Administration"),
    ResourceInfo(id="roles", label="Roles & Permissions", group="Administration"),
    ResourceInfo(id="audit_logs", label="Audit Logs", group="Administration"),
]

RESOURCE_IDS: tuple[str, ...] = tuple(r.id for r in RESOURCES)


def resources_by_group() -> dict[str, list[ResourceInfo]]:
    """Group resources for display, keeping declaration order."""
    groups: dict[str, list[ResourceInfo]] = {}
    for resource in RESOURCES:
        groups.setdefault(resource.group, []).append(resource)
    return groups
