"""Mood check-ins and the weekly insight pipeline."""

from .aggregate import UNKNOWN, mood_breakdown
from .insight import Insight, InsightGenerator, LLMInsightGenerator, UpstreamError, parse_insight
from .prompts import MoodLog, build_insight_prompt
from .service import WeeklyInsight, WeeklyInsightService, WeeklySummary, summarize_week
from .store import MoodRecord, MoodStore
from .week import InvalidDate, WeekRange, day_bounds, week_window

__all__ = [
    "UNKNOWN",
    "mood_breakdown",
    "Insight",
    "InsightGenerator",
    "LLMInsightGenerator",
    "UpstreamError",
    "parse_insight",
    "MoodLog",
    "build_insight_prompt",
    "WeeklyInsight",
    "WeeklyInsightService",
    "WeeklySummary",
    "summarize_week",
    "MoodRecord",
    "MoodStore",
    "InvalidDate",
    "WeekRange",
    "day_bounds",
    "week_window",
]
