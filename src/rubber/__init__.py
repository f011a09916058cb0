"""
Rubber — Elasticsearch Comfort Functions
========================================

A small facade over the Elasticsearch REST API for index CRUD, document
CRUD, search, bulk get and mapping lookups. Responses are reduced to
plain values: booleans for writes, `_source` bodies for reads, generated
ids for creates and (id, _source) pairs for searches.

Usage:
    from rubber import Node, Rubber

    node = Node()
    node.connect(["http://localhost:9200"])
    es = Rubber(node)

    es.create_index("people", {"mappings": {"properties": {"name": {"type": "text"}}}})
    id = es.create("people", "_doc", {"name": "joe"})
    es.refresh_index("people")
    es.search("people", {"query": {"match": {"name": "joe"}}})

Several clusters can be connected under different prefixes and switched
between with `Rubber.prefix_switch`.

License: MIT
"""

__version__ = "0.1.0"

from .core import Rubber
from .errors import NotConnectedError, RubberError
from .models import CatIndex, Hit
from .node import Node

__all__ = ["Rubber", "Node", "RubberError", "NotConnectedError", "CatIndex", "Hit"]
