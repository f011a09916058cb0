"""
Rubber Models — Request Targets and Result Rows
===============================================

Small value types shared by the connection provider and the facade:

    target()   → ordered path segments, e.g. ["people", "person", "42"]
    Request    → {url segments, HTTP method, optional body}
    Hit        → one (id, _source) pair out of a search hit list
    CatIndex   → one row of the `_cat/indices` text table

Nothing here talks to the network.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, NamedTuple, Optional


def target(*segments: Any) -> List[str]:
    """
    Build a request target from path segments.

    Optional segments (document type, id) may be passed as None and are
    dropped. The first segment is the index and must be non-empty.

    Args:
        *segments: Index name followed by type, id or action suffix

    Returns:
        List of string segments

    Raises:
        ValueError: If the index segment is missing or empty
    """
    if not segments or segments[0] is None or str(segments[0]) == "":
        raise ValueError("target requires a non-empty index segment")
    return [str(s) for s in segments if s is not None]


def path(segments: List[str]) -> str:
    """Render target segments as a URL path."""
    return "/" + "/".join(segments)


class Request(NamedTuple):
    """A single REST call: target segments, method and optional JSON body."""

    url: List[str]
    method: str
    body: Optional[Any] = None

    @property
    def path(self) -> str:
        return path(self.url)


class Hit(NamedTuple):
    """A search hit reduced to its id and stored document."""

    id: str
    source: Dict[str, Any]

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "Hit":
        return cls(raw["_id"], raw.get("_source"))


def hits(body: Dict[str, Any]) -> List[Hit]:
    """Extract hits from a `_search` response body."""
    return [Hit.from_raw(h) for h in body["hits"]["hits"]]


# `_cat/indices` columns in the order the engine prints them
CAT_INDICES_COLUMNS = [
    "health",
    "status",
    "index",
    "uuid",
    "pri",
    "rep",
    "docs.count",
    "docs.deleted",
    "store.size",
    "pri.store.size",
]


@dataclass
class CatIndex:
    """
    One row of the `_cat/indices` listing.

    Values are kept as the engine printed them (strings). The column
    order is assumed stable; there is no header row to validate against.
    """

    health: Optional[str] = None
    status: Optional[str] = None
    index: Optional[str] = None
    uuid: Optional[str] = None
    pri: Optional[str] = None
    rep: Optional[str] = None
    docs_count: Optional[str] = None
    docs_deleted: Optional[str] = None
    store_size: Optional[str] = None
    pri_store_size: Optional[str] = None

    @classmethod
    def from_line(cls, line: str) -> "CatIndex":
        """
        Parse a whitespace separated table line.

        Short lines (closed indices print fewer columns) leave the
        trailing fields as None; extra tokens are ignored.
        """
        names = [f.name for f in fields(cls)]
        return cls(**dict(zip(names, line.split())))

    def as_dict(self) -> Dict[str, str]:
        """Mapping keyed by the engine's column names, present columns only."""
        values = [getattr(self, f.name) for f in fields(self)]
        return {
            col: value
            for col, value in zip(CAT_INDICES_COLUMNS, values)
            if value is not None
        }
