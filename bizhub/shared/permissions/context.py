"""
Session permission context.

A ``PermissionContext`` is an immutable snapshot of (role, evaluator). The
``PermissionContextHolder`` owns the current snapshot for a session: sign-in
creates it, sign-out clears it and a refresh replaces it wholesale. Role
fetches that were superseded while in flight are discarded.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Optional

from .catalog import RESOURCE_IDS
from .evaluator import PermissionEvaluator, normalize_role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermissionContext:
    role: Optional[str]
    evaluator: PermissionEvaluator = field(default_factory=PermissionEvaluator)

    def check(self, action: str, resource: str) -> bool:
        return self.evaluator.allows(self.role, action, resource)

    @property
    def can_manage_users(self) -> bool:
        return self.evaluator.can_manage_users(self.role)

    def capabilities(
        self, resources: Iterable[str] = RESOURCE_IDS
    ) -> dict[str, list[str]]:
        """Granted actions per resource, omitting resources with none."""
        result = {}
        for resource in resources:
            actions = self.evaluator.granted_actions(self.role, resource)
            if actions:
                result[resource] = actions
        return result


class PermissionContextHolder:
    """Process-wide holder of the signed-in session's permission context."""

    def __init__(self, evaluator: Optional[PermissionEvaluator] = None):
        self._evaluator = evaluator or PermissionEvaluator()
        self._generation = 0
        self._current: Optional[PermissionContext] = None

    @property
    def current(self) -> Optional[PermissionContext]:
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    def check(self, action: str, resource: str) -> bool:
        """Deny everything while signed out."""
        if self._current is None:
            return False
        return self._current.check(action, resource)

    def begin(self) -> int:
        """Start a role change; any earlier in-flight fetch becomes stale."""
        self._generation += 1
        return self._generation

    def apply(
        self,
        generation: int,
        role: Optional[str],
        evaluator: Optional[PermissionEvaluator] = None,
    ) -> bool:
        """
        Install the fetched role if no newer change started meanwhile.

        Returns:
            True if the context was replaced, False if the result was stale
        """
        if generation != self._generation:
            logger.debug(
                f"Discarding stale role fetch {generation} "
                f"(current generation {self._generation})"
            )
            return False
        self._install(role, evaluator)
        return True

    def _install(
        self, role: Optional[str], evaluator: Optional[PermissionEvaluator]
    ) -> PermissionContext:
        if evaluator is not None:
            self._evaluator = evaluator
        self._current = PermissionContext(normalize_role(role), self._evaluator)
        return self._current

    def sign_in(
        self, role: Optional[str], evaluator: Optional[PermissionEvaluator] = None
    ) -> PermissionContext:
        self.begin()
        return self._install(role, evaluator)

    def sign_out(self) -> None:
        self.begin()
        self._current = None

    async def refresh(
        self,
        fetch_role: Callable[[], Awaitable[Optional[str]]],
        evaluator: Optional[PermissionEvaluator] = None,
    ) -> bool:
        """
        Re-fetch the role and replace the context.

        Args:
            fetch_role: Coroutine function returning the principal's role
            evaluator: Optional evaluator built from freshly loaded roles

        Returns:
            True if this refresh was applied, False if it was superseded
        """
        generation = self.begin()
        role = await fetch_role()
        return self.apply(generation, role, evaluator)
