"""Monday-anchored calendar week windows."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

WEEK = timedelta(days=7)


@dataclass(frozen=True)
class WeekRange:
    """Half-open [start, end) window in naive local time."""

    start: datetime
    end: datetime

    def to_dict(self) -> dict:
        """ISO strings in UTC, the form the API returns."""
        return {"start": _utc_iso(self.start), "end": _utc_iso(self.end)}


@dataclass(frozen=True)
class InvalidDate:
    """Anchor could not be parsed into a calendar date."""

    value: str
    message: str = "Invalid weekStart date"


def _utc_iso(moment: datetime) -> str:
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_anchor(anchor: str | date | datetime | None) -> datetime | InvalidDate:
    """Turn an anchor into a naive local datetime, or InvalidDate."""
    if anchor is None or anchor == "":
        return datetime.now()
    if isinstance(anchor, datetime):
        return _to_local_naive(anchor)
    if isinstance(anchor, date):
        return datetime.combine(anchor, time.min)

    text = str(anchor).strip()
    # fromisoformat on older interpreters rejects the trailing Z
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _to_local_naive(datetime.fromisoformat(text))
    except (OverflowError, ValueError):
        return InvalidDate(value=str(anchor))


def week_window(anchor: str | date | datetime | None = None) -> WeekRange | InvalidDate:
    """Monday 00:00 to the following Monday 00:00 around ``anchor``.

    An absent anchor means now. A present but unparsable anchor yields
    ``InvalidDate`` instead of silently falling back to now, as does a week
    that runs past the representable datetime range.
    """
    moment = parse_anchor(anchor)
    if isinstance(moment, InvalidDate):
        return moment

    midnight = datetime.combine(moment.date(), time.min)
    try:
        start = midnight - timedelta(days=midnight.weekday())
        window = WeekRange(start=start, end=start + WEEK)
        # both bounds must survive the UTC conversion used for queries
        window.to_dict()
    except (OverflowError, ValueError):
        return InvalidDate(value=str(anchor))
    return window


def day_bounds(day: date | None = None) -> tuple[datetime, datetime]:
    """Local midnight to the next local midnight."""
    start = datetime.combine(day or date.today(), time.min)
    return start, start + timedelta(days=1)
