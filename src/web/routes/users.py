"""Signup, login, password reset, and per-user mood listing."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from cli.config_models import QuietMindConfig
from mood import MoodStore
from web.auth import get_current_user
from web.deps import get_config, get_mood_store, get_token_service, get_users_db
from web.models import (
    AuthResponse,
    Credentials,
    ForgotPasswordRequest,
    MoodOut,
    OkResponse,
    ResetPasswordRequest,
    UserOut,
)
from web.passwords import generate_reset_token, hash_password, hash_reset_token, verify_password
from web.routes.moods import to_mood_out
from web.tokens import TokenService
from web.user_store import (
    EmailInUseError,
    create_user,
    find_user_by_reset_token,
    get_user_by_email,
    public_user,
    set_reset_token,
    update_password,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/users", tags=["users"])


def _auth_response(user: dict, tokens: TokenService) -> AuthResponse:
    return AuthResponse(user=UserOut(**public_user(user)), token=tokens.issue(user["id"]))


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: Optional[Credentials] = None,
    db_path: Path = Depends(get_users_db),
    tokens: TokenService = Depends(get_token_service),
):
    if body is None or not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password required")

    try:
        user = create_user(body.email, hash_password(body.password), db_path=db_path)
    except EmailInUseError:
        raise HTTPException(status_code=409, detail="Email already in use")
    except Exception:
        logger.exception("users.signup_failed")
        raise HTTPException(status_code=500, detail="Failed to create user")

    return _auth_response(user, tokens)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: Optional[Credentials] = None,
    db_path: Path = Depends(get_users_db),
    tokens: TokenService = Depends(get_token_service),
):
    if body is None or not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password required")

    user = get_user_by_email(body.email, db_path=db_path)
    if not user or not verify_password(body.password, user["password"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info("users.login", user_id=user["id"])
    return _auth_response(user, tokens)


@router.post("/forgot-password", response_model=OkResponse, response_model_exclude_none=True)
async def forgot_password(
    body: Optional[ForgotPasswordRequest] = None,
    db_path: Path = Depends(get_users_db),
    config: QuietMindConfig = Depends(get_config),
):
    if body is None or not body.email:
        raise HTTPException(status_code=400, detail="Email is required")

    user = get_user_by_email(body.email, db_path=db_path)
    if not user:
        # same answer whether or not the account exists
        return OkResponse()

    raw, token_hash = generate_reset_token()
    expiry = datetime.now(timezone.utc) + timedelta(minutes=config.auth.reset_token_minutes)
    set_reset_token(user["id"], token_hash, expiry, db_path=db_path)
    logger.info("users.reset_token_issued", user_id=user["id"])

    if not config.auth.expose_reset_token:
        return OkResponse()
    return OkResponse(
        reset_token=raw,
        expires_at=expiry.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


@router.post("/reset-password", response_model=OkResponse, response_model_exclude_none=True)
async def reset_password(
    body: Optional[ResetPasswordRequest] = None,
    db_path: Path = Depends(get_users_db),
):
    if body is None or not body.token or not body.password:
        raise HTTPException(status_code=400, detail="Token and new password required")

    user = find_user_by_reset_token(hash_reset_token(body.token), db_path=db_path)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid or expired token")

    update_password(user["id"], hash_password(body.password), db_path=db_path)
    return OkResponse()


@router.get("/{user_id}/moods", response_model=list[MoodOut])
async def list_user_moods(
    user_id: int,
    user: dict = Depends(get_current_user),
    store: MoodStore = Depends(get_mood_store),
):
    if user_id != user["id"]:
        raise HTTPException(status_code=403, detail="Forbidden")
    return [to_mood_out(r) for r in store.list_for_user(user["id"])]
