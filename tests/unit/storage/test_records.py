# tests/unit/storage/test_records.py — v1
"""Tests for storage/records.py — read-through caching and invalidation."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from careerai.cache.models import CacheNamespace
from careerai.cache.resume_cache import CacheStore
from careerai.storage.base_document_store import DocumentNotFound
from careerai.storage.records import INTERVIEW_FEEDBACK, RESUMES, USERS, RecordRepository


@pytest.fixture
def repo(documents, cache) -> RecordRepository:
    return RecordRepository(documents, cache)


class TestResumes:
    @pytest.mark.asyncio
    async def test_read_fills_cache(self, repo, documents, cache):
        await documents.set(RESUMES, "r1", {"title": "Backend"})
        assert await repo.get_resume("r1") == {"title": "Backend"}
        assert await cache.get(CacheNamespace.RESUME_RECORD, "r1") == {"title": "Backend"}

    @pytest.mark.asyncio
    async def test_second_read_served_from_cache(self, repo, documents):
        await documents.set(RESUMES, "r1", {"title": "Backend"})
        await repo.get_resume("r1")
        documents.get = AsyncMock(side_effect=AssertionError("document store hit"))
        assert await repo.get_resume("r1") == {"title": "Backend"}

    @pytest.mark.asyncio
    async def test_missing_not_cached(self, repo, cache):
        assert await repo.get_resume("nope") is None
        assert await cache.get(CacheNamespace.RESUME_RECORD, "nope") is None

    @pytest.mark.asyncio
    async def test_update_invalidates(self, repo, documents):
        await documents.set(RESUMES, "r1", {"title": "Backend"})
        await repo.get_resume("r1")
        await repo.update_resume("r1", {"title": "Platform"})
        assert (await repo.get_resume("r1"))["title"] == "Platform"

    @pytest.mark.asyncio
    async def test_save_invalidates(self, repo):
        await repo.save_resume("r1", {"title": "v1"})
        await repo.get_resume("r1")
        await repo.save_resume("r1", {"title": "v2"})
        assert (await repo.get_resume("r1"))["title"] == "v2"

    @pytest.mark.asyncio
    async def test_delete_invalidates(self, repo):
        await repo.save_resume("r1", {"title": "v1"})
        await repo.get_resume("r1")
        await repo.delete_resume("r1")
        assert await repo.get_resume("r1") is None

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, repo):
        with pytest.raises(DocumentNotFound):
            await repo.update_resume("ghost", {"title": "x"})


class TestUserProfiles:
    @pytest.mark.asyncio
    async def test_update_invalidates(self, repo, documents):
        await documents.set(USERS, "u1", {"plan": "free"})
        assert (await repo.get_user_profile("u1"))["plan"] == "free"
        await repo.update_user_profile("u1", {"plan": "pro"})
        assert (await repo.get_user_profile("u1"))["plan"] == "pro"


class TestInterviewFeedback:
    @pytest.mark.asyncio
    async def test_keyed_by_user_and_interview(self, repo, documents, cache):
        await repo.save_interview_feedback("u1", "i9", {"score": 7})
        assert await documents.get(INTERVIEW_FEEDBACK, "u1:i9") == {"score": 7}
        assert await repo.get_interview_feedback("u1", "i9") == {"score": 7}
        assert await cache.get(CacheNamespace.INTERVIEW_FEEDBACK, "u1:i9") == {"score": 7}
        assert await repo.get_interview_feedback("u2", "i9") is None

    @pytest.mark.asyncio
    async def test_save_invalidates(self, repo):
        await repo.save_interview_feedback("u1", "i9", {"score": 7})
        await repo.get_interview_feedback("u1", "i9")
        await repo.save_interview_feedback("u1", "i9", {"score": 9})
        assert (await repo.get_interview_feedback("u1", "i9"))["score"] == 9


class TestWithoutCache:
    @pytest.mark.asyncio
    async def test_reads_go_to_documents(self, documents):
        repo = RecordRepository(documents, CacheStore(None))
        await repo.save_resume("r1", {"title": "Backend"})
        assert await repo.get_resume("r1") == {"title": "Backend"}
