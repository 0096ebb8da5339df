# src/main.py — v2
"""CLI entry point: score, hash, normalize, analyze, usage commands.

Usage:
    careerai score <resume> [--job <file>]
    careerai hash <file>
    careerai normalize <raw_response> --resume <file> [--job <file>]
    careerai analyze <resume> [--job <file>] [--user ID] [--tier TIER]
    careerai usage <user_id> [--tier TIER]

Results are printed as JSON on stdout; logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from careerai.logging.logger import setup_logging
from careerai.version import __version__

logger = logging.getLogger(__name__)

_TIERS = ("free", "starter", "pro", "premium")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else "WARNING", log_format="text")

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="careerai",
        description=f"careerai v{__version__}: resume scoring and analysis",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_score = subparsers.add_parser("score", help="Deterministic ATS score")
    p_score.add_argument("file", type=Path, help="Resume text file")
    p_score.add_argument("--job", type=Path, default=None, help="Job description file")
    p_score.set_defaults(func=_cmd_score)

    p_hash = subparsers.add_parser("hash", help="Content hash used as cache key")
    p_hash.add_argument("file", type=Path, help="Text file")
    p_hash.set_defaults(func=_cmd_hash)

    p_norm = subparsers.add_parser("normalize", help="Normalize a raw AI analysis response")
    p_norm.add_argument("raw", type=Path, help="File holding the raw model output")
    p_norm.add_argument("--resume", type=Path, required=True, help="Resume text file")
    p_norm.add_argument("--job", type=Path, default=None, help="Job description file")
    p_norm.set_defaults(func=_cmd_normalize)

    p_analyze = subparsers.add_parser("analyze", help="Full analysis (cache, AI, fallback)")
    p_analyze.add_argument("file", type=Path, help="Resume text file")
    p_analyze.add_argument("--job", type=Path, default=None, help="Job description file")
    p_analyze.add_argument("--user", default="cli", help="User id for usage metering")
    p_analyze.add_argument("--tier", choices=_TIERS, default="free", help="Subscription tier")
    p_analyze.set_defaults(func=_cmd_analyze)

    p_usage = subparsers.add_parser("usage", help="Current month's usage for a user")
    p_usage.add_argument("user_id", help="User id")
    p_usage.add_argument("--tier", choices=_TIERS, default="free", help="Subscription tier")
    p_usage.set_defaults(func=_cmd_usage)

    return parser


async def _cmd_score(args: argparse.Namespace) -> int:
    from careerai.scoring.ats_scorer import score_resume

    result = score_resume(_read_text(args.file), _read_optional(args.job))
    _print_json(result.to_wire())
    return 0


async def _cmd_hash(args: argparse.Namespace) -> int:
    from careerai.cache.fingerprint import hash_content

    _print_json({"hash": hash_content(_read_text(args.file))})
    return 0


async def _cmd_normalize(args: argparse.Namespace) -> int:
    from careerai.normalize.json_extraction import InvalidAIResponse
    from careerai.normalize.response_normalizer import normalize_analysis

    try:
        feedback = normalize_analysis(
            _read_text(args.raw), _read_text(args.resume), _read_optional(args.job)
        )
    except InvalidAIResponse as e:
        logger.error("%s", e)
        return 1
    _print_json(feedback.to_wire())
    return 0


async def _cmd_analyze(args: argparse.Namespace) -> int:
    from careerai.api.facade import analyze_resume
    from careerai.api.models import AnalysisRequest
    from careerai.llm.client_factory import create_task_client

    settings = _load_settings(args.verbose)
    cache, limiter, store = _build_services(settings)
    llm = create_task_client("analysis", settings)

    request = AnalysisRequest(
        resume_text=_read_text(args.file),
        job_description=_read_optional(args.job),
        user_id=args.user,
        tier=args.tier,
    )
    try:
        outcome = await analyze_resume(request, llm=llm, cache=cache, limiter=limiter)
    finally:
        if store is not None:
            await store.close()

    _print_json(outcome.to_wire())
    return 0 if outcome.status == "ok" else 1


async def _cmd_usage(args: argparse.Namespace) -> int:
    settings = _load_settings(args.verbose)
    _, limiter, store = _build_services(settings)
    try:
        stats = await limiter.get_all_usage_stats(args.user_id, args.tier)
    finally:
        if store is not None:
            await store.close()
    _print_json({feature: s.model_dump(by_alias=True) for feature, s in stats.items()})
    return 0


def _load_settings(verbose: bool = False) -> Any:
    from careerai.config.settings import load_settings

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    return settings


def _build_services(settings: Any) -> tuple[Any, Any, Any]:
    """Cache, limiter and their shared key-value store (possibly None)."""
    from careerai.cache.cache_factory import create_kv_store
    from careerai.cache.models import default_policies
    from careerai.cache.resume_cache import CacheStore
    from careerai.usage.limiter import UsageLimiter
    from careerai.usage.limits import build_plan_limits

    store = create_kv_store(settings)
    cache = CacheStore(store, default_policies(settings), settings.fingerprint_length)
    limiter = UsageLimiter(
        store,
        build_plan_limits(settings),
        counter_ttl=settings.usage_counter_ttl,
    )
    return cache, limiter, store


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def _read_optional(path: Path | None) -> str | None:
    return _read_text(path) if path is not None else None


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    sys.exit(main())
