"""Mood check-in, weekly summary and weekly insight routes (per-user)."""

import asyncio
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from mood import (
    InvalidDate,
    MoodRecord,
    MoodStore,
    UpstreamError,
    WeeklyInsightService,
    day_bounds,
    summarize_week,
)
from web.auth import get_current_user
from web.deps import get_insight_service, get_mood_store
from web.models import (
    MAX_DESCRIPTION_LENGTH,
    MAX_FEELING_LENGTH,
    MAX_TIP_LENGTH,
    MoodCreate,
    MoodOut,
    TodayCheckinOut,
    WeeklyInsightOut,
    WeeklySummaryOut,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/moods", tags=["moods"])


def to_mood_out(record: MoodRecord) -> MoodOut:
    return MoodOut(
        id=record.id,
        user_id=record.user_id,
        feeling=record.feeling,
        description=record.description,
        tip=record.tip,
        created_at=record.created_at.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


@router.post("", response_model=MoodOut, status_code=status.HTTP_201_CREATED)
async def create_mood(
    body: Optional[MoodCreate] = None,
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    if body is None or not body.feeling:
        raise HTTPException(status_code=400, detail="Feeling is required")
    for name, value, limit in (
        ("Feeling", body.feeling, MAX_FEELING_LENGTH),
        ("Description", body.description, MAX_DESCRIPTION_LENGTH),
        ("Tip", body.tip, MAX_TIP_LENGTH),
    ):
        if value and len(value) > limit:
            raise HTTPException(status_code=400, detail=f"{name} is too long")

    record = store.create(
        user_id=user["id"],
        feeling=body.feeling,
        description=body.description,
        tip=body.tip,
    )
    return to_mood_out(record)


@router.get("", response_model=list[MoodOut])
async def list_moods(
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    return [to_mood_out(r) for r in store.list_for_user(user["id"])]


@router.get("/weekly-summary", response_model=WeeklySummaryOut)
async def weekly_summary(
    week_start: Optional[str] = Query(None, alias="weekStart"),
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    result = summarize_week(store, user["id"], week_start)
    if isinstance(result, InvalidDate):
        raise HTTPException(status_code=400, detail=result.message)
    return result.to_dict()


@router.get("/weekly-insight", response_model=WeeklyInsightOut)
async def weekly_insight(
    week_start: Optional[str] = Query(None, alias="weekStart"),
    user: dict = Depends(get_current_user),
    service: WeeklyInsightService = Depends(get_insight_service),
):
    """Weekly counts plus a generated reflection and one thing to try."""
    try:
        result = await asyncio.to_thread(service.weekly_insight, user["id"], week_start)
    except Exception:
        logger.exception("weekly_insight.error", user_id=user["id"])
        raise HTTPException(status_code=500, detail="Server error")

    if isinstance(result, InvalidDate):
        raise HTTPException(status_code=400, detail=result.message)
    if isinstance(result, UpstreamError):
        logger.warning(
            "weekly_insight.upstream_error", user_id=user["id"], status_code=result.status_code
        )
        return JSONResponse(
            status_code=500,
            content={"error": result.message, "details": result.details},
        )
    data = result.to_dict()
    return WeeklyInsightOut(
        range=data["range"],
        total=data["total"],
        breakdown=data["breakdown"],
        insight=result.insight,
        try_this=result.try_this,
    )


@router.get("/today-checkin", response_model=TodayCheckinOut)
async def today_checkin(
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    start, end = day_bounds()
    return TodayCheckinOut(has_checked_in=store.exists_between(user["id"], start, end))
