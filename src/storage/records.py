# src/storage/records.py — v1
"""Read-through cached access to resume records, user profiles and
interview feedback.

Reads try the cache first and fill it on a miss. Every mutation writes the
document store and then deletes the cache key before returning, so the next
read sees the new data. A failed invalidation is logged; the entry then
lives until its TTL.
"""

from __future__ import annotations

import logging
from typing import Any

from careerai.cache.models import CacheNamespace, interview_feedback_key
from careerai.cache.resume_cache import CacheStore
from careerai.storage.base_document_store import BaseDocumentStore

logger = logging.getLogger(__name__)

RESUMES = "resumes"
USERS = "users"
INTERVIEW_FEEDBACK = "feedback"


class RecordRepository:
    """Document store access with per-namespace caching."""

    def __init__(self, documents: BaseDocumentStore, cache: CacheStore) -> None:
        self._documents = documents
        self._cache = cache

    async def _read_through(
        self,
        namespace: CacheNamespace,
        cache_key: str,
        collection: str,
        doc_id: str,
    ) -> dict[str, Any] | None:
        cached = await self._cache.get(namespace, cache_key)
        if isinstance(cached, dict):
            return cached
        doc = await self._documents.get(collection, doc_id)
        if doc is not None:
            await self._cache.set(namespace, cache_key, doc)
        return doc

    # --- Resumes ---

    async def get_resume(self, resume_id: str) -> dict[str, Any] | None:
        return await self._read_through(
            CacheNamespace.RESUME_RECORD, resume_id, RESUMES, resume_id
        )

    async def save_resume(self, resume_id: str, data: dict[str, Any]) -> None:
        await self._documents.set(RESUMES, resume_id, data)
        await self._cache.delete(CacheNamespace.RESUME_RECORD, resume_id)

    async def update_resume(self, resume_id: str, fields: dict[str, Any]) -> None:
        await self._documents.update(RESUMES, resume_id, fields)
        await self._cache.delete(CacheNamespace.RESUME_RECORD, resume_id)
        logger.debug("Invalidated resume record %s", resume_id)

    async def delete_resume(self, resume_id: str) -> None:
        await self._documents.delete(RESUMES, resume_id)
        await self._cache.delete(CacheNamespace.RESUME_RECORD, resume_id)

    # --- User profiles ---

    async def get_user_profile(self, user_id: str) -> dict[str, Any] | None:
        return await self._read_through(CacheNamespace.USER_PROFILE, user_id, USERS, user_id)

    async def update_user_profile(self, user_id: str, fields: dict[str, Any]) -> None:
        await self._documents.update(USERS, user_id, fields)
        await self._cache.delete(CacheNamespace.USER_PROFILE, user_id)
        logger.debug("Invalidated user profile %s", user_id)

    # --- Interview feedback ---

    async def get_interview_feedback(
        self, user_id: str, interview_id: str
    ) -> dict[str, Any] | None:
        key = interview_feedback_key(user_id, interview_id)
        return await self._read_through(
            CacheNamespace.INTERVIEW_FEEDBACK, key, INTERVIEW_FEEDBACK, key
        )

    async def save_interview_feedback(
        self, user_id: str, interview_id: str, feedback: dict[str, Any]
    ) -> None:
        key = interview_feedback_key(user_id, interview_id)
        await self._documents.set(INTERVIEW_FEEDBACK, key, feedback)
        await self._cache.delete(CacheNamespace.INTERVIEW_FEEDBACK, key)
