"""Bearer-token validation for FastAPI routes."""

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from web.deps import get_token_service
from web.tokens import InvalidTokenError, TokenService

logger = structlog.get_logger()

# auto_error=False so a missing header is a 401 with our message, not a 403
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """Resolve the bearer token to ``{"id": user_id}``."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Missing authorization token")
    try:
        user_id = tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.debug("auth.token_rejected", reason=str(e))
        raise _unauthorized("Invalid or expired token")
    return {"id": user_id}
