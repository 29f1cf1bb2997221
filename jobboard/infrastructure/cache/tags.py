"""Cache tag builders. Single place for tag format (DRY).

Three shapes:
    global:<kind>                   every row of a kind
    id:<kind>-<id>                  one row
    <parentKind>:<parentId>-<kind>  rows of <kind> owned by one parent row

Kind names never contain CACHE_TAG_SCOPE_SEP and are never "global" or
"id", so tags of different kinds and shapes cannot collide.
"""

from jobboard.core.constants import (
    CACHE_TAG_GLOBAL,
    CACHE_TAG_ID,
    CACHE_TAG_NAMESPACE_SEP,
    CACHE_TAG_SCOPE_SEP,
)
from jobboard.domain.enums import CacheTagKind
from jobboard.domain.exceptions import InvalidArgumentException


def _kind_value(kind: CacheTagKind | str, name: str = "kind") -> str:
    try:
        return CacheTagKind(kind).value
    except ValueError:
        raise InvalidArgumentException(name, f"unknown cache tag kind {kind!r}") from None


def _require_id(value: str | None, name: str) -> str:
    if value is None or value == "":
        raise InvalidArgumentException(name, "must be a non-empty string")
    return value


def get_global_tag(kind: CacheTagKind | str) -> str:
    """Tag covering all rows of a kind, e.g. ``global:users``."""
    return f"{CACHE_TAG_GLOBAL}{CACHE_TAG_NAMESPACE_SEP}{_kind_value(kind)}"


def get_id_tag(kind: CacheTagKind | str, entity_id: str) -> str:
    """Tag covering exactly one row, e.g. ``id:users-u1``.

    Raises:
        InvalidArgumentException: If entity_id is empty.
    """
    entity_id = _require_id(entity_id, "entity_id")
    return (
        f"{CACHE_TAG_ID}{CACHE_TAG_NAMESPACE_SEP}{_kind_value(kind)}"
        f"{CACHE_TAG_SCOPE_SEP}{entity_id}"
    )


def get_scoped_tag(
    kind: CacheTagKind | str,
    parent_kind: CacheTagKind | str,
    parent_id: str,
) -> str:
    """Tag covering rows of kind owned by one parent, e.g. ``organizations:o1-jobListings``.

    Raises:
        InvalidArgumentException: If parent_id is empty.
    """
    parent_id = _require_id(parent_id, "parent_id")
    return (
        f"{_kind_value(parent_kind, 'parent_kind')}{CACHE_TAG_NAMESPACE_SEP}"
        f"{parent_id}{CACHE_TAG_SCOPE_SEP}{_kind_value(kind)}"
    )
