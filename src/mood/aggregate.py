"""Feeling-label counts for a set of check-ins."""

from typing import Any, Iterable

UNKNOWN = "unknown"


def _feeling_of(record: Any) -> str | None:
    if isinstance(record, dict):
        return record.get("feeling")
    return getattr(record, "feeling", None)


def mood_breakdown(records: Iterable[Any]) -> dict[str, int]:
    """Count check-ins per feeling label.

    Labels are compared verbatim, so "Happy" and "happy " land in separate
    buckets. Empty or missing feelings count under ``"unknown"``. Every record
    is counted exactly once.
    """
    breakdown: dict[str, int] = {}
    for record in records:
        key = _feeling_of(record) or UNKNOWN
        breakdown[key] = breakdown.get(key, 0) + 1
    return breakdown
