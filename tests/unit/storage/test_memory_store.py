# tests/unit/storage/test_memory_store.py — v1
"""Tests for storage/memory_store.py."""

from __future__ import annotations

import pytest

from careerai.storage.base_document_store import DocumentNotFound
from careerai.storage.memory_store import set_dotted


class TestSetDotted:
    def test_creates_intermediate(self):
        doc: dict = {}
        set_dotted(doc, "rewards.flag", True)
        assert doc == {"rewards": {"flag": True}}

    def test_replaces_non_dict(self):
        doc = {"usage": 3}
        set_dotted(doc, "usage.resumesUsed", 1)
        assert doc == {"usage": {"resumesUsed": 1}}

    def test_keeps_siblings(self):
        doc = {"usage": {"a": 1, "b": 2}}
        set_dotted(doc, "usage.a", 5)
        assert doc == {"usage": {"a": 5, "b": 2}}

    def test_hyphenated_segment(self):
        doc: dict = {}
        set_dotted(doc, "rewards.feedback_reward_cover-letter", True)
        assert doc["rewards"]["feedback_reward_cover-letter"] is True


class TestInMemoryDocumentStore:
    @pytest.mark.asyncio
    async def test_get_missing(self, documents):
        assert await documents.get("users", "nope") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, documents):
        await documents.set("users", "u1", {"name": "Jane"})
        assert await documents.get("users", "u1") == {"name": "Jane"}

    @pytest.mark.asyncio
    async def test_returns_copies(self, documents):
        data = {"usage": {"resumesUsed": 1}}
        await documents.set("users", "u1", data)
        data["usage"]["resumesUsed"] = 99
        fetched = await documents.get("users", "u1")
        fetched["usage"]["resumesUsed"] = 42
        assert (await documents.get("users", "u1"))["usage"]["resumesUsed"] == 1

    @pytest.mark.asyncio
    async def test_update_dotted(self, documents):
        await documents.set("users", "u1", {"usage": {"resumesUsed": 3}})
        await documents.update("users", "u1", {"usage.resumesUsed": 1, "plan": "pro"})
        assert await documents.get("users", "u1") == {"usage": {"resumesUsed": 1}, "plan": "pro"}

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, documents):
        with pytest.raises(DocumentNotFound):
            await documents.update("users", "ghost", {"a": 1})

    @pytest.mark.asyncio
    async def test_delete(self, documents):
        await documents.set("users", "u1", {})
        await documents.delete("users", "u1")
        await documents.delete("users", "u1")
        assert await documents.get("users", "u1") is None

    @pytest.mark.asyncio
    async def test_collections_isolated(self, documents):
        await documents.set("users", "x", {"kind": "user"})
        assert await documents.get("resumes", "x") is None
