"""
Shared plumbing for table access.

Every query goes through `run`, so a failing Supabase call always surfaces
as RemoteCallError and is logged once, here.
"""

import logging
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError

from erp.core.exceptions import RemoteCallError

logger = logging.getLogger(__name__)


def run(query, action: str):
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as e:
        logger.exception("Supabase call failed: %s", action)
        raise RemoteCallError(f"Could not {action}") from e


def rows(result) -> list[dict]:
    # some builder calls hand back None instead of an empty response
    if result is None or not result.data:
        return []
    return result.data if isinstance(result.data, list) else [result.data]


def first(result) -> Optional[dict]:
    found = rows(result)
    return found[0] if found else None


def embedded(row: dict, relation: str, column: str) -> Any:
    """Read `column` from an embedded relation such as `courses(course_name)`."""
    related = row.get(relation)
    if isinstance(related, list):
        related = related[0] if related else None
    return related.get(column) if isinstance(related, dict) else None
