"""
Local cache of query results, reconciled after confirmed mutations.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from orgusers.data.serializer import build_where


@dataclass(frozen=True)
class CacheKey:
    """Identifies one cached query: an entity acronym and its where clause."""

    acronym: str
    where: Optional[str] = None


def cache_key_for(organization_id: str, acronym: str) -> CacheKey:
    return CacheKey(acronym=acronym, where=build_where(businessOrganizationId=organization_id))


def _entry_id(entry: Any) -> Any:
    if isinstance(entry, Mapping):
        return entry.get('id')
    return getattr(entry, 'id', None)


def on_assignment_deleted(
    cache: Mapping[CacheKey, Tuple[Any, ...]],
    deleted: Any,
    organization_id: str,
    acronym: str
) -> dict:
    """
    Returns a copy of ``cache`` where the organization's assignment list no
    longer holds ``deleted``.

    Only call once the delete mutation has been confirmed. Entries of other
    organizations and other entities are carried over untouched, and the
    input mapping is never modified.

    Args:
        cache: cached query results keyed by CacheKey
        deleted: the deleted assignment (model or raw dict)
        organization_id: organization whose list is reconciled
        acronym: assignment entity acronym
    """
    updated = dict(cache)
    key = cache_key_for(organization_id, acronym)
    if key not in updated:
        return updated
    deleted_id = _entry_id(deleted)
    updated[key] = tuple(entry for entry in updated[key] if _entry_id(entry) != deleted_id)
    return updated
