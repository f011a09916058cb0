"""
Rubber Core — Elasticsearch Comfort Functions
=============================================

A thin facade over the Elasticsearch REST API. Each operation builds a
target path, sends one request through the node and reduces the response
to what callers actually want:

    status 200/201          → True
    a stored document       → its `_source`
    a created document      → its generated id
    a search                → [(id, _source), ...]

Absent indices and documents (404 on read style calls) come back as None
instead of raising. Everything else is logged with its full context and
re-raised, see `rubber.errors`.
"""

from typing import Any, Dict, List, Optional

import structlog

from .errors import RubberError, handle, handle_missing, ok
from .models import CatIndex, Hit, Request, hits, target
from .node import Node

logger = structlog.get_logger(__name__)


class Rubber:
    """
    Index, document and search operations against the node's active connection.

    Example:
        node = Node()
        node.connect(["http://localhost:9200"])
        es = Rubber(node)

        es.create_index("people", {"mappings": {"properties": {"name": {"type": "text"}}}})
        id = es.create("people", "_doc", {"name": "joe"})
        es.get("people", "_doc", id)   # {"name": "joe"}
    """

    # Merged under the caller's index spec, caller keys win
    DEFAULT_SETTINGS = {"settings": {"number_of_shards": 1}}

    # Single page cap for all(); there is no scrolling past it
    ALL_SIZE = 10000

    def __init__(self, node: Node):
        self.node = node

    @classmethod
    def connect(cls, hosts: Optional[List[str]] = None, **kwargs: Any) -> "Rubber":
        """Create a node, connect it and wrap it."""
        node = Node()
        node.connect(hosts, **kwargs)
        return cls(node)

    def _request(self, url: List[str], method: str, body: Optional[Any] = None):
        return self.node.request(Request(url, method, body))

    def prefix_switch(self, key: str) -> str:
        """Change the active connection prefix."""
        return self.node.prefix_switch(key)

    # ── Indices ──────────────────────────────────────────────────────────

    def exists(
        self,
        index: str,
        doc_type: Optional[str] = None,
        id: Optional[str] = None,
    ) -> Optional[bool]:
        """
        Check if an index exists, or a document with id within an index.

        Args:
            index: Index name
            doc_type: Document type (with id)
            id: Document id (with doc_type)

        Returns:
            True if found; False or None if absent
        """
        url = target(index, doc_type, id) if id is not None else target(index)
        try:
            return ok(self._request(url, "HEAD"))
        except Exception as e:
            return handle_missing(e)

    def create_index(self, index: str, spec: Dict[str, Any]) -> bool:
        """
        Create an index with provided mappings.

        Args:
            index: Index name
            spec: Index body; must contain "mappings", may carry "settings"
                  which then replaces the defaults wholesale

        Returns:
            True on success
        """
        if spec.get("mappings") is None:
            raise ValueError("index spec requires mappings")
        body = {**self.DEFAULT_SETTINGS, **spec}
        return ok(self._request(target(index), "PUT", body))

    def delete_index(self, index: str) -> Optional[bool]:
        """Delete an index."""
        return self._delete(target(index))

    def list_indices(self) -> List[CatIndex]:
        """
        List indices from the `_cat/indices` text table.

        Relies on the engine's column order, see CatIndex.
        """
        resp = self._request(["_cat", "indices"], "GET")
        return [CatIndex.from_line(line) for line in str(resp.body).split("\n") if line.strip()]

    def mappings(self, index: str, doc_type: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Get index mappings, or those of one type; None if absent."""
        try:
            return self._request(target(index, "_mappings", doc_type), "GET").body
        except Exception as e:
            return handle_missing(e)

    def refresh_index(self, index: str) -> None:
        """
        Refresh the index so the latest writes become visible to search.

        Raises:
            RubberError: If the engine did not acknowledge the refresh
        """
        try:
            resp = self._request(target(index, "_refresh"), "POST")
            if not ok(resp):
                raise RubberError("failed to refresh", resp=resp, index=index)
        except Exception as e:
            handle(e)

    # ── Documents ────────────────────────────────────────────────────────

    def create(self, index: str, doc_type: str, doc: Dict[str, Any]) -> Optional[str]:
        """
        Persist a document and return its generated id.

        Raises:
            RubberError: If the engine answered without success
        """
        try:
            resp = self._request(target(index, doc_type), "POST", doc)
            if not ok(resp):
                raise RubberError("failed to create", resp=resp, doc=doc, index=index)
            return resp.body["_id"]
        except Exception as e:
            return handle(e)

    def put(self, index: str, doc_type: str, id: str, doc: Dict[str, Any]) -> Optional[bool]:
        """Store a document under an explicit id."""
        try:
            return ok(self._request(target(index, doc_type, id), "PUT", doc))
        except Exception as e:
            return handle(e)

    def get(self, index: str, doc_type: str, id: str) -> Optional[Dict[str, Any]]:
        """Stored document body, None if absent."""
        try:
            return self._request(target(index, doc_type, id), "GET").body.get("_source")
        except Exception as e:
            return handle_missing(e)

    def bulk_get(self, index: str, doc_type: str, ids: List[str]) -> Optional[Dict[str, Any]]:
        """
        Fetch several documents in one request.

        Args:
            index: Index name
            doc_type: Document type
            ids: Non-empty list of document ids

        Returns:
            Dict of id → document for the ids that were found
        """
        if not ids:
            raise ValueError("bulk_get requires at least one id")
        try:
            resp = self._request(target(index, doc_type, "_mget"), "GET", {"ids": list(ids)})
            if ok(resp):
                return {d["_id"]: d["_source"] for d in resp.body["docs"] if d.get("found")}
            return None
        except Exception as e:
            return handle_missing(e)

    def _delete(self, url: List[str]) -> Optional[bool]:
        try:
            return ok(self._request(url, "DELETE"))
        except Exception as e:
            return handle(e)

    def delete(self, index: str, doc_type: str, id: Optional[str] = None) -> Optional[bool]:
        """Delete everything under a type, or a single document."""
        return self._delete(target(index, doc_type, id))

    def delete_all(self, index: str) -> Optional[bool]:
        """Delete every document in the index, keeping the index itself."""
        body = {"query": {"match_all": {}}}
        try:
            return ok(self._request(target(index, "_delete_by_query"), "POST", body))
        except Exception as e:
            return handle(e)

    def delete_by(self, index: str, doc_type: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Delete by query like {"match": {"type": "nmap scan"}}.

        Returns:
            The delete-by-query response body (deleted count, failures, ...)
        """
        body = {"query": query}
        try:
            return self._request(target(index, doc_type, "_delete_by_query"), "POST", body).body
        except Exception as e:
            return handle(e)

    def clear(self, index: str, doc_type: str) -> Optional[bool]:
        """Clear an index type; does nothing if the index is missing."""
        if self.exists(index):
            logger.info("Clearing index", index=index, doc_type=doc_type)
            return self.delete(index, doc_type)
        return None

    # ── Search ───────────────────────────────────────────────────────────

    def all(self, index: str) -> List[Hit]:
        """
        Every document in the index via a single match_all page.

        Capped at ALL_SIZE hits; larger indices are silently truncated
        since no scroll is used.
        """
        query = {"size": self.ALL_SIZE, "query": {"match_all": {}}}
        return hits(self._request(target(index, "_search"), "GET", query).body)

    def search(self, index: str, query: Dict[str, Any]) -> Optional[List[Hit]]:
        """
        Run an Elasticsearch search body against an index.

        Returns:
            List of (id, _source) hits, None if the index is absent
        """
        try:
            resp = self._request(target(index, "_search"), "GET", query)
            if ok(resp):
                return hits(resp.body)
            return None
        except Exception as e:
            return handle_missing(e)

    def close(self):
        """Close every connection of the node."""
        self.node.stop()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
