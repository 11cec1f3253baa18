"""Weekly summary and insight orchestration."""

from dataclasses import dataclass, field
from datetime import date, datetime

import structlog

from .aggregate import mood_breakdown
from .insight import InsightGenerator, UpstreamError
from .prompts import MoodLog, build_insight_prompt
from .store import MoodStore
from .week import InvalidDate, WeekRange, week_window

logger = structlog.get_logger()

EMPTY_WEEK_INSIGHT = (
    "No check-ins yet for this week. Add a few moods and I’ll generate a weekly insight for you."
)
EMPTY_WEEK_TRY_THIS = (
    "Do a 30-second brain dump: write one thing on your mind, then close your eyes."
)


@dataclass
class WeeklySummary:
    range: WeekRange
    total: int
    breakdown: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "range": self.range.to_dict(),
            "total": self.total,
            "breakdown": dict(self.breakdown),
        }


@dataclass
class WeeklyInsight(WeeklySummary):
    insight: str = ""
    try_this: str = ""

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["insight"] = self.insight
        data["tryThis"] = self.try_this
        return data


def summarize_week(
    store: MoodStore, user_id: int, week_start: str | date | datetime | None = None
) -> WeeklySummary | InvalidDate:
    """Counts per feeling for the week around ``week_start``. No generation."""
    window = week_window(week_start)
    if isinstance(window, InvalidDate):
        return window

    records = store.list_between(user_id, window.start, window.end)
    return WeeklySummary(range=window, total=len(records), breakdown=mood_breakdown(records))


class WeeklyInsightService:
    """Window, fetch, aggregate, prompt, generate, assemble.

    Failures come back as values: InvalidDate for a bad anchor, UpstreamError
    when the generation endpoint refuses. Anything else raises.
    """

    def __init__(self, store: MoodStore, generator: InsightGenerator):
        self.store = store
        self.generator = generator

    def weekly_summary(
        self, user_id: int, week_start: str | date | datetime | None = None
    ) -> WeeklySummary | InvalidDate:
        return summarize_week(self.store, user_id, week_start)

    def weekly_insight(
        self, user_id: int, week_start: str | date | datetime | None = None
    ) -> WeeklyInsight | InvalidDate | UpstreamError:
        window = week_window(week_start)
        if isinstance(window, InvalidDate):
            return window

        records = self.store.list_between(user_id, window.start, window.end)
        if not records:
            return WeeklyInsight(
                range=window,
                total=0,
                breakdown={},
                insight=EMPTY_WEEK_INSIGHT,
                try_this=EMPTY_WEEK_TRY_THIS,
            )

        breakdown = mood_breakdown(records)
        prompt = build_insight_prompt(
            breakdown,
            [MoodLog(r.local_date(), r.feeling, r.description) for r in records],
        )

        result = self.generator.generate(prompt)
        if isinstance(result, UpstreamError):
            logger.warning("weekly_insight.upstream_failed", user_id=user_id, total=len(records))
            return result

        logger.info("weekly_insight.generated", user_id=user_id, total=len(records))
        return WeeklyInsight(
            range=window,
            total=len(records),
            breakdown=breakdown,
            insight=result.insight,
            try_this=result.try_this,
        )
