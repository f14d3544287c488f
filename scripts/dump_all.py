#!/usr/bin/env python3
"""Dump the forum data pystackit can fetch for the configured account.

Logs in, then reads questions, the answers of the newest questions,
notifications and quiz topics, and prints each model next to the raw API
JSON so fields the client does not parse yet are easy to spot.

Usage
-----
Set environment variables and run::

    export STACKIT_BASE_URL="http://localhost:8000"
    export STACKIT_USERNAME="alice"
    export STACKIT_PASSWORD="your-password"
    python scripts/dump_all.py

Options::

    --questions N        Number of questions to list (default: 5)
    --search TEXT        Only list questions matching TEXT
    --output FILE        Write JSON to FILE instead of stdout
    --skip-notifications Skip notification endpoints
    --skip-mcq           Skip quiz topic endpoints
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pystackit import StackItClient, StackItConfig, StackItError  # noqa: E402
from pystackit._redact import redact_for_log  # noqa: E402
from pystackit.models import StackItBaseModel  # noqa: E402


def _entry(model: StackItBaseModel) -> dict[str, Any]:
    return {"parsed": model.model_dump(mode="json"), "raw": redact_for_log(model.raw)}


async def _section(result: dict[str, Any], name: str, fetch: Any) -> Any:
    try:
        value = await fetch()
    except StackItError as exc:
        logging.getLogger(__name__).warning("%s failed: %s", name, exc)
        result[name] = {"error": str(exc), "type": type(exc).__name__}
        return None
    if isinstance(value, list):
        result[name] = [_entry(item) if isinstance(item, StackItBaseModel) else item for item in value]
    elif isinstance(value, StackItBaseModel):
        result[name] = _entry(value)
    else:
        result[name] = value
    return value


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump forum data pystackit can fetch for debugging / development.",
    )
    parser.add_argument("--questions", type=int, default=5, help="Number of questions to list")
    parser.add_argument("--search", help="Only list questions matching TEXT")
    parser.add_argument("--output", "-o", help="Write JSON to FILE instead of stdout")
    parser.add_argument("--skip-notifications", action="store_true", help="Skip notification endpoints")
    parser.add_argument("--skip-mcq", action="store_true", help="Skip quiz topic endpoints")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = StackItConfig.from_env()
    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "api_root": config.api_root,
    }

    async with StackItClient(config) as client:
        user = await client.login()
        result["user"] = _entry(user)

        questions = await _section(
            result,
            "questions",
            lambda: client.get_questions(limit=args.questions, search=args.search),
        )
        answers: dict[str, Any] = {}
        for question in questions or []:
            bucket: dict[str, Any] = {}
            await _section(bucket, "answers", lambda q=question: client.get_answers(q.id))
            answers[str(question.id)] = bucket["answers"]
        result["answers"] = answers

        if not args.skip_notifications:
            await _section(result, "notifications", client.get_notifications)
            await _section(result, "notification_stats", client.get_notification_stats)

        if not args.skip_mcq:
            await _section(result, "topics", client.get_topics)
            await _section(result, "my_quizzes", client.get_my_quizzes)

    payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"JSON written to {args.output}", file=sys.stderr)
    else:
        print(payload)


if __name__ == "__main__":
    asyncio.run(main())
