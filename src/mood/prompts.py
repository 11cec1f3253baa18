"""Prompt templates for the weekly reflection."""

import json
import re
from datetime import date, datetime
from typing import Iterable, NamedTuple

_WHITESPACE = re.compile(r"\s+")


class MoodLog(NamedTuple):
    """One check-in as the prompt sees it."""

    day: date
    feeling: str | None
    description: str | None


class PromptTemplates:
    """Fixed wording for the weekly reflection coach."""

    WEEKLY_INSIGHT = """You are QuietMind's gentle weekly reflection coach.
Based ONLY on the mood logs below, write:
1) "insight": 2-3 short supportive sentences summarizing the week + 1 gentle pattern you notice.
2) "tryThis": 1 simple action for tonight (one sentence).
Rules:
- Be non-judgmental and calming.
- No diagnosis, no medical claims.
- Keep it practical and short.

Mood counts: {counts}

Mood logs:
{logs}

Return JSON ONLY:
{{ "insight": "...", "tryThis": "..." }}"""


def format_log_line(log: MoodLog) -> str:
    """``- YYYY-MM-DD | feeling | description`` with whitespace collapsed."""
    day = log.day.date() if isinstance(log.day, datetime) else log.day
    desc = _WHITESPACE.sub(" ", log.description or "").strip()
    return f"- {day.isoformat()} | {log.feeling or ''} | {desc}"


def build_insight_prompt(breakdown: dict[str, int], logs: Iterable[MoodLog]) -> str:
    """Render the breakdown and chronological logs into the coach prompt.

    Callers pass logs oldest first and only when there is at least one.
    """
    counts = json.dumps(breakdown, ensure_ascii=False, separators=(",", ":"))
    lines = "\n".join(format_log_line(log) for log in logs)
    return PromptTemplates.WEEKLY_INSIGHT.format(counts=counts, logs=lines).strip()
