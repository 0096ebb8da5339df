# src/llm/prompts.py — v1
"""Prompt builders for the analysis, rewrite and job-match tasks.

Templates live in ``llm/prompts/*.txt`` and use ``string.Template``
placeholders so the JSON examples inside them need no brace escaping.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from string import Template

_PROMPT_DIR = Path(__file__).parent / "prompts"

_JOB_MATCH_FIELD = """,
  "jobMatch": {"score": 0, "matchedSkills": [""], "missingSkills": [""], "recommendations": [""]}"""


@lru_cache(maxsize=None)
def load_template(name: str) -> Template:
    """Load and cache a prompt template by file stem."""
    return Template((_PROMPT_DIR / f"{name}.txt").read_text(encoding="utf-8"))


def build_analysis_prompt(
    resume_text: str,
    job_description: str | None = None,
    job_title: str | None = None,
    company_name: str | None = None,
) -> str:
    targeted = bool(job_description and job_description.strip())
    target_lines = []
    if targeted:
        target_lines.append(f"\n# TARGET JOB DESCRIPTION\n{job_description.strip()}\n")
    if job_title:
        target_lines.append(f"\n# TARGET ROLE: {job_title}\n")
    if company_name:
        target_lines.append(f"\n# TARGET COMPANY: {company_name}\n")

    return load_template("analysis").substitute(
        resume_text=resume_text,
        target_block="".join(target_lines),
        job_match_block=_JOB_MATCH_FIELD if targeted else "",
    )


def build_rewrite_prompt(
    original_text: str,
    role: str | None = None,
    tone: str | None = None,
    context: str | None = None,
    target: str | None = None,
) -> str:
    return load_template("rewrite").substitute(
        original_text=original_text,
        role=role or "various roles",
        tone=tone or "Professional and achievement-focused",
        target=target or "Make it more impactful and ATS-friendly",
        context_block=f"\n# CONTEXT\n{context}\n" if context else "",
    )


def build_job_match_prompt(resume_text: str, job_description: str) -> str:
    return load_template("job_match").substitute(
        resume_text=resume_text,
        job_description=job_description,
    )
