# tests/unit/core/test_models.py — v2
"""Tests for core/models.py — score clamping and the camelCase wire shape."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from careerai.core.models import (
    CategoryScore,
    Issue,
    ResumeFeedback,
    RoadmapItem,
    Tip,
    clamp_score,
)


class TestClampScore:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.5, 1), (2.5, 3), (72.49, 72), (-3, 0), (150, 100), (math.nan, 0), (math.inf, 100), (-math.inf, 0)],
    )
    def test_values(self, value, expected):
        assert clamp_score(value) == expected


class TestWireShape:
    def test_camel_case_keys(self):
        wire = ResumeFeedback(overall_score=70).to_wire()
        assert wire["overallScore"] == 70
        assert "criticalIssues" in wire
        assert "atsKeywords" in wire
        assert "quickWins" in wire["roadmap"]

    def test_job_match_omitted_when_absent(self):
        assert "jobMatch" not in ResumeFeedback().to_wire()

    def test_accepts_camel_and_snake_input(self):
        a = RoadmapItem.model_validate({"action": "x", "timeToComplete": "1h"})
        b = RoadmapItem(action="x", time_to_complete="1h")
        assert a == b
        assert a.to_wire()["timeToComplete"] == "1h"

    def test_optional_fields_omitted(self):
        wire = Tip(message="m").to_wire()
        assert "priority" not in wire


class TestScoreFields:
    def test_category_score_clamped(self):
        assert CategoryScore(score=140).score == 100
        assert CategoryScore(score=-2).score == 0

    def test_overall_rounded_half_up(self):
        assert ResumeFeedback(overall_score=66.5).overall_score == 67

    def test_models_are_frozen(self):
        feedback = ResumeFeedback()
        with pytest.raises(ValidationError):
            feedback.overall_score = 5  # type: ignore[misc]

    def test_issue_defaults(self):
        issue = Issue(description="Typo")
        assert issue.severity == "minor"
        assert issue.fix == "Review and address this issue"

    def test_categories_property(self):
        assert list(ResumeFeedback().categories) == [
            "ats", "content", "structure", "skills", "impact", "grammar",
        ]
