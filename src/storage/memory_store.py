# src/storage/memory_store.py — v1
"""In-process document store for development and tests."""

from __future__ import annotations

import copy
from typing import Any

from careerai.storage.base_document_store import BaseDocumentStore, DocumentNotFound


def set_dotted(document: dict[str, Any], path: str, value: Any) -> None:
    """Assign ``value`` at a dotted path, creating intermediate dicts."""
    parts = path.split(".")
    node = document
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


class InMemoryDocumentStore(BaseDocumentStore):
    """Dictionary-backed document store. Returned documents are deep copies."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        doc = self._collections.get(collection, {}).get(doc_id)
        if doc is None:
            raise DocumentNotFound(f"{collection}/{doc_id}")
        for path, value in fields.items():
            set_dotted(doc, path, copy.deepcopy(value))

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collections.get(collection, {}).pop(doc_id, None)
