import os, jwt, logging
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

from matching.logic.access_gate import resolve_tier
from matching.logic.constants import AccessTier

logger = logging.getLogger(__name__)

JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me")
JWT_ALG = "HS256"


class Caller(NamedTuple):
    user_id: Optional[str]
    tier: AccessTier
    is_anonymous: bool


ANONYMOUS = Caller(user_id=None, tier=AccessTier.FREE, is_anonymous=True)


def create_token(sub: str, role: str = AccessTier.FREE.value, expires_delta: timedelta = timedelta(days=7)) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": sub,
        "role": role,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALG)

def decode_token(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])

def resolve_caller(authorization: Optional[str]) -> Caller:
    """Caller identity from an optional `Bearer <token>` header. Bad tokens mean anonymous."""
    if not authorization or not authorization.lower().startswith("bearer "):
        return ANONYMOUS
    token = authorization.split(" ", 1)[1].strip()
    try:
        claims = decode_token(token)
    except jwt.PyJWTError as e:
        logger.warning(f"Ignoring invalid bearer token: {e}")
        return ANONYMOUS
    sub = claims.get("sub")
    if not sub:
        return ANONYMOUS
    return Caller(user_id=str(sub), tier=resolve_tier(claims.get("role")), is_anonymous=False)
