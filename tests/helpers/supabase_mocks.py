"""
Helpers for mocking chained Supabase queries.

``db.table("x").select("*").eq("id", 1).execute()`` is a builder chain ending
in an awaited ``execute``. ``make_query`` returns a builder whose chain
methods return itself, so tests can both stub the result and assert on the
calls made along the way.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock, Mock

from postgrest.exceptions import APIError

CHAIN_METHODS = (
    "select",
    "insert",
    "update",
    "delete",
    "eq",
    "neq",
    "in_",
    "order",
    "limit",
)


def make_query(
    data: Optional[List[Dict[str, Any]]] = None,
    error: Optional[Exception] = None,
    results: Optional[List[Any]] = None,
) -> MagicMock:
    """
    Create a chainable query builder mock.

    Args:
        data: Rows returned by every ``execute()`` call
        error: Exception raised by ``execute()`` instead
        results: Successive ``execute()`` outcomes (row lists or exceptions)
    """
    query = MagicMock()
    for name in CHAIN_METHODS:
        getattr(query, name).return_value = query

    if results is not None:
        query.execute = AsyncMock(
            side_effect=[
                r if isinstance(r, Exception) else Mock(data=r) for r in results
            ]
        )
    elif error is not None:
        query.execute = AsyncMock(side_effect=error)
    else:
        query.execute = AsyncMock(return_value=Mock(data=data or []))
    return query


def make_db(**tables: MagicMock) -> Mock:
    """Supabase client mock dispatching ``table(name)`` to the given builders."""
    db = Mock()
    db.table = Mock(side_effect=lambda name: tables[name])
    return db


def api_error(message: str, code: str = "PGRST000") -> APIError:
    return APIError({"message": message, "code": code, "details": None, "hint": None})
