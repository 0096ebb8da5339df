# src/storage/base_document_store.py — v1
"""Abstract document store interface (the system of record).

Documents are JSON-like dicts addressed by collection and id. ``update``
accepts dotted field paths (``"rewards.feedback_reward_cover-letter"``) so
nested fields can be changed without rewriting the document.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class UserNotFound(Exception):
    """The referenced user document does not exist."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class DocumentNotFound(KeyError):
    """update() was called on a missing document."""


class BaseDocumentStore(ABC):
    """Unified interface for document database backends."""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return a copy of the document, or None if absent."""

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or replace a document."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Merge fields into an existing document.

        Raises:
            DocumentNotFound: If the document does not exist.
        """

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document. Missing documents are ignored."""
