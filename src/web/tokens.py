"""HS256 user tokens."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """Token failed signature, expiry, or claim checks."""


class TokenService:
    """Signs and verifies user tokens with a secret given at construction."""

    def __init__(self, secret: str, ttl_days: int = 7):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.ttl = timedelta(days=ttl_days)

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        issued = now or datetime.now(timezone.utc)
        claims = {"sub": str(user_id), "iat": issued, "exp": issued + self.ttl}
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> int:
        """Return the user id in ``token`` or raise InvalidTokenError."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError("bad sub claim") from e
