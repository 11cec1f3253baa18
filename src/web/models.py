"""Pydantic request/response schemas for the web API.

Request bodies make required fields Optional so the routes can answer 400
with a readable message instead of FastAPI's 422. Responses use camelCase on
the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- Users ---


class Credentials(BaseModel):
    email: Optional[str] = Field(None, max_length=320)
    password: Optional[str] = Field(None, max_length=1024)


class ForgotPasswordRequest(BaseModel):
    email: Optional[str] = Field(None, max_length=320)


class ResetPasswordRequest(BaseModel):
    token: Optional[str] = None
    password: Optional[str] = Field(None, max_length=1024)


class UserOut(_CamelOut):
    id: int
    email: str
    created_at: str = Field(serialization_alias="createdAt")


class AuthResponse(BaseModel):
    user: UserOut
    token: str


class OkResponse(_CamelOut):
    ok: bool = True
    reset_token: Optional[str] = Field(None, serialization_alias="resetToken")
    expires_at: Optional[str] = Field(None, serialization_alias="expiresAt")


# --- Moods ---


# Length limits are checked in the route so oversize input gets a 400.
MAX_FEELING_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 5000
MAX_TIP_LENGTH = 1000


class MoodCreate(BaseModel):
    feeling: Optional[str] = None
    description: Optional[str] = None
    tip: Optional[str] = None


class MoodOut(_CamelOut):
    id: int
    user_id: int = Field(serialization_alias="userId")
    feeling: str
    description: Optional[str] = None
    tip: Optional[str] = None
    created_at: str = Field(serialization_alias="createdAt")


class WeekRangeOut(BaseModel):
    start: str
    end: str


class WeeklySummaryOut(BaseModel):
    range: WeekRangeOut
    total: int
    breakdown: dict[str, int]


class WeeklyInsightOut(WeeklySummaryOut):
    model_config = ConfigDict(populate_by_name=True)

    insight: str
    try_this: str = Field(serialization_alias="tryThis")


class TodayCheckinOut(_CamelOut):
    has_checked_in: bool = Field(serialization_alias="hasCheckedIn")
