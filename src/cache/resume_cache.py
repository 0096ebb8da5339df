# src/cache/resume_cache.py — v1
"""Namespaced, TTL-tiered cache over a BaseKeyValueStore.

Every operation is fail-open: a missing store, an unreachable backend or a
corrupt payload degrades to a miss (reads) or a no-op (writes). The store
being absent is a normal state, not an error.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from careerai.cache.base_cache_store import BaseKeyValueStore, CacheUnavailable
from careerai.cache.fingerprint import DEFAULT_FINGERPRINT_LENGTH
from careerai.cache.models import (
    CachedEntry,
    CacheNamespace,
    NamespacePolicy,
    default_policies,
)
from careerai.core.models import ResumeFeedback, RewriteSuggestions

logger = logging.getLogger(__name__)


class CacheStore:
    """Typed cache facade used by the API layer and RecordRepository."""

    def __init__(
        self,
        store: BaseKeyValueStore | None,
        policies: dict[CacheNamespace, NamespacePolicy] | None = None,
        fingerprint_length: int = DEFAULT_FINGERPRINT_LENGTH,
    ) -> None:
        self._store = store
        self._policies = policies or default_policies()
        self.fingerprint_length = fingerprint_length

    @property
    def enabled(self) -> bool:
        return self._store is not None

    def policy(self, namespace: CacheNamespace) -> NamespacePolicy:
        return self._policies[namespace]

    # --- Generic operations ---

    async def get(self, namespace: CacheNamespace, key: str) -> Any | None:
        """Return the cached value or None on miss, error or corrupt data."""
        if self._store is None:
            return None
        full_key = self.policy(namespace).key(key)
        try:
            raw = await self._store.get(full_key)
        except CacheUnavailable as e:
            logger.warning("Cache read failed for %s: %s", full_key, e)
            return None
        if raw is None:
            logger.debug("Cache miss: %s", full_key)
            return None
        entry = self._decode(full_key, raw)
        if entry is None:
            return None
        logger.debug("Cache hit: %s", full_key)
        return entry.value

    async def set(
        self,
        namespace: CacheNamespace,
        key: str,
        value: Any,
        ttl: int | None = None,
    ) -> bool:
        """Overwrite a cache entry. Returns False when nothing was written.

        ``ttl`` overrides the namespace policy and must be positive.
        """
        if self._store is None:
            return False
        policy = self.policy(namespace)
        full_key = policy.key(key)
        ttl_seconds = policy.ttl_seconds if ttl is None else ttl
        if ttl_seconds <= 0:
            logger.error("Refusing to cache %s with non-positive ttl %d", full_key, ttl_seconds)
            return False
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            payload = CachedEntry(value=value).model_dump_json(by_alias=True)
            await self._store.setex(full_key, ttl_seconds, payload)
        except CacheUnavailable as e:
            logger.warning("Cache write failed for %s: %s", full_key, e)
            return False
        except (TypeError, ValueError) as e:
            logger.error("Value for %s is not JSON-serializable: %s", full_key, e)
            return False
        logger.debug("Cached %s (ttl=%ds)", full_key, ttl_seconds)
        return True

    async def delete(self, namespace: CacheNamespace, key: str) -> bool:
        if self._store is None:
            return False
        full_key = self.policy(namespace).key(key)
        try:
            await self._store.delete(full_key)
        except CacheUnavailable as e:
            logger.warning("Cache invalidation failed for %s: %s", full_key, e)
            return False
        return True

    async def batch_get(self, namespace: CacheNamespace, keys: list[str]) -> list[Any | None]:
        """Fetch several entries in one round trip, in input order."""
        if self._store is None or not keys:
            return [None] * len(keys)
        full_keys = [self.policy(namespace).key(k) for k in keys]
        try:
            raws = await self._store.mget(full_keys)
        except CacheUnavailable as e:
            logger.warning("Batch cache read failed (%d keys): %s", len(keys), e)
            return [None] * len(keys)
        values: list[Any | None] = []
        for full_key, raw in zip(full_keys, raws):
            entry = self._decode(full_key, raw) if raw is not None else None
            values.append(entry.value if entry is not None else None)
        return values

    async def stats(self) -> dict[str, Any]:
        if self._store is None:
            return {"enabled": False, "keys": 0}
        try:
            keys = await self._store.dbsize()
        except CacheUnavailable as e:
            logger.warning("Cache stats unavailable: %s", e)
            return {"enabled": True, "keys": 0}
        return {"enabled": True, "keys": keys}

    # --- Typed helpers ---

    async def get_analysis(self, content_hash: str) -> ResumeFeedback | None:
        data = await self.get(CacheNamespace.ANALYSIS, content_hash)
        if data is None:
            return None
        try:
            return ResumeFeedback.model_validate(data)
        except ValidationError as e:
            logger.warning("Discarding stale analysis for %s: %s", content_hash, e)
            return None

    async def set_analysis(self, content_hash: str, feedback: ResumeFeedback) -> bool:
        return await self.set(CacheNamespace.ANALYSIS, content_hash, feedback)

    async def get_extracted_text(self, file_hash: str) -> str | None:
        data = await self.get(CacheNamespace.EXTRACTED_TEXT, file_hash)
        return data if isinstance(data, str) else None

    async def set_extracted_text(self, file_hash: str, text: str) -> bool:
        return await self.set(CacheNamespace.EXTRACTED_TEXT, file_hash, text)

    async def get_fixes(self, key: str) -> RewriteSuggestions | None:
        data = await self.get(CacheNamespace.FIXES, key)
        if data is None:
            return None
        try:
            return RewriteSuggestions.model_validate(data)
        except ValidationError as e:
            logger.warning("Discarding stale fixes for %s: %s", key, e)
            return None

    async def set_fixes(self, key: str, fixes: RewriteSuggestions) -> bool:
        return await self.set(CacheNamespace.FIXES, key, fixes)

    async def close(self) -> None:
        if self._store is not None:
            await self._store.close()

    @staticmethod
    def _decode(full_key: str, raw: str) -> CachedEntry | None:
        try:
            return CachedEntry.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Corrupt cache entry %s treated as miss: %s", full_key, e.error_count())
            return None
