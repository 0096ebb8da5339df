# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides sample resumes, a mock LLM client, and in-memory stores.
No external dependencies: Redis and Gemini are always mocked.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from careerai.cache.memory_store import InMemoryKeyValueStore
from careerai.cache.resume_cache import CacheStore
from careerai.llm.models import LLMResponse
from careerai.logging.context import clear_context
from careerai.storage.memory_store import InMemoryDocumentStore
from careerai.usage.limiter import UsageLimiter


SAMPLE_RESUME = """Jane Doe
Summary
Backend engineer with 6 years of Python experience.

Experience
Senior Engineer, Acme Corp
- Led migration of 12 services to AWS, cutting costs by 30%
- Developed a Python data pipeline processing 2M events per day
- Improved API latency by 45% with Redis caching
- Managed a team of 5 engineers

Education
BSc Computer Science

Skills
Python, SQL, Docker, Kubernetes, AWS, Git
"""

SAMPLE_JOB = """Senior Python Engineer
We are looking for an engineer with Python, AWS and Kubernetes experience.
You will build data pipelines and mentor engineers. Experience with React is a plus.
"""

VALID_ANALYSIS = {
    "overallScore": 78,
    "ats": {"score": 82, "weight": 0.25, "tips": [{"type": "good", "message": "Clean layout"}]},
    "content": {"score": 75, "tips": ["Add more metrics"], "issues": ["Vague summary"]},
    "structure": {"score": 80},
    "skills": {"score": 70},
    "impact": {"score": 72},
    "grammar": {"score": 90},
    "strengths": ["Quantified achievements"],
    "weaknesses": ["Short summary"],
    "criticalIssues": [],
    "suggestions": [{"title": "Expand summary", "description": "Add a headline", "impact": "high"}],
    "atsKeywords": {"matched": ["python"], "missing": ["react"], "score": 60},
    "roadmap": {"quickWins": [{"action": "Rewrite summary", "timeToComplete": "15 minutes"}]},
}


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def sample_job() -> str:
    return SAMPLE_JOB


@pytest.fixture
def valid_analysis_json() -> str:
    """Model output wrapped in a markdown fence, as Gemini often returns it."""
    return "```json\n" + json.dumps(VALID_ANALYSIS) + "\n```"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


# === FIXTURES: Mocked capabilities ===


@pytest.fixture
def mock_llm_response(valid_analysis_json: str) -> LLMResponse:
    return LLMResponse(
        content=valid_analysis_json,
        input_tokens=900,
        output_tokens=400,
        model="gemini-2.0-flash-001",
        provider="mock",
        latency_ms=1200,
    )


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient whose generate() returns a valid analysis."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.generate = AsyncMock(return_value=mock_llm_response.content)
    client.provider_name = "mock"
    return client


# === FIXTURES: In-memory stores ===


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def cache(kv_store: InMemoryKeyValueStore) -> CacheStore:
    return CacheStore(kv_store)


@pytest.fixture
def limiter(kv_store: InMemoryKeyValueStore, fixed_now: datetime) -> UsageLimiter:
    return UsageLimiter(kv_store, clock=lambda: fixed_now)


@pytest.fixture
def documents() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
