from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from coursepages.core.config import settings

ALGORITHM = "HS256"


def _create_token(author_id: int, email: str, token_type: str, expire_min: int) -> str:
    payload = {
        "author_id": author_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=expire_min),
        "type": token_type,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def create_access_token(author_id: int, email: str) -> str:
    # token court, utilisé dans le header Authorization
    return _create_token(author_id, email, "access", settings.JWT_EXPIRE_MIN)


def create_refresh_token(author_id: int, email: str) -> str:
    # token long, sert uniquement à /auth/refresh
    return _create_token(author_id, email, "refresh", settings.JWT_REFRESH_EXPIRE_MIN)


def verify_token(token: str, expected_type: str = "access") -> Optional[dict]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != expected_type:
        return None
    return payload


def decode_token(token: str) -> Optional[int]:
    payload = verify_token(token)
    if payload is None:
        return None
    return payload.get("author_id")
