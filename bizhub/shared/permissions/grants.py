"""
Permission grant value types.

Grants are stored as strings (``*``, ``resource:*`` or ``resource:action``)
and parsed once into one of three frozen value types, so that evaluation is a
set lookup instead of repeated string splitting.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Union

logger = logging.getLogger(__name__)

WILDCARD = "*"
SEPARATOR = ":"


class InvalidGrantError(ValueError):
    """Raised when a grant string is not one of the three accepted forms."""

    def __init__(self, raw: object) -> None:
        super().__init__(f"Invalid permission grant: {raw!r}")
        self.raw = raw


@dataclass(frozen=True)
class GlobalGrant:
    """All actions on all resources."""

    def __str__(self) -> str:
        return WILDCARD


@dataclass(frozen=True)
class ResourceWildcardGrant:
    """All actions on one resource."""

    resource: str

    def __str__(self) -> str:
        return f"{self.resource}{SEPARATOR}{WILDCARD}"


@dataclass(frozen=True)
class ExactGrant:
    """One action on one resource."""

    resource: str
    action: str

    def __str__(self) -> str:
        return f"{self.resource}{SEPARATOR}{self.action}"


Grant = Union[GlobalGrant, ResourceWildcardGrant, ExactGrant]


def _valid_segment(segment: str) -> bool:
    return bool(segment) and segment == segment.strip() and WILDCARD not in segment


def parse_grant(raw: object) -> Grant:
    """
    Parse a stored grant string.

    Args:
        raw: The stored grant, e.g. ``"tasks:read"``

    Returns:
        The matching grant value

    Raises:
        InvalidGrantError: If the string is empty, has an empty segment, more
            than one separator, or a misplaced wildcard
    """
    if not isinstance(raw, str):
        raise InvalidGrantError(raw)

    value = raw.strip().lower()
    if value == WILDCARD:
        return GlobalGrant()

    parts = value.split(SEPARATOR)
    if len(parts) != 2:
        raise InvalidGrantError(raw)

    resource, action = parts
    if not _valid_segment(resource):
        raise InvalidGrantError(raw)
    if action == WILDCARD:
        return ResourceWildcardGrant(resource)
    if not _valid_segment(action):
        raise InvalidGrantError(raw)
    return ExactGrant(resource, action)


def parse_grants(raw_grants: Iterable[object]) -> frozenset[Grant]:
    """Parse a list of grants, raising on the first malformed entry."""
    return frozenset(parse_grant(raw) for raw in raw_grants)


def parse_stored_grants(raw_grants: Iterable[object] | None, source: str) -> frozenset[Grant]:
    """
    Parse grants read back from storage.

    Malformed entries are skipped and logged; they never grant access.
    """
    grants = set()
    for raw in raw_grants or []:
        try:
            grants.add(parse_grant(raw))
        except InvalidGrantError:
            logger.warning(f"Ignoring malformed grant {raw!r} on role {source}")
    return frozenset(grants)


def format_grants(grants: Iterable[Grant]) -> list[str]:
    """Render grants as sorted stored strings."""
    return sorted(str(grant) for grant in grants)
