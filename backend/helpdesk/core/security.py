"""Helpers for verifying session tokens issued by the identity provider."""

from __future__ import annotations

import datetime as dt
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from helpdesk.core.config import settings


def decode_session_token(token: str) -> dict[str, Any]:
    options = {"verify_aud": settings.session_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.SESSION_JWT_SECRET,
            algorithms=[settings.SESSION_JWT_ALGORITHM],
            audience=settings.session_audience,
            options=options,
        )
    except ExpiredSignatureError as exc:
        raise ValueError("expired_token") from exc
    except JWTError as exc:
        raise ValueError("invalid_token") from exc


def create_session_token(user_id: str, email: str, *, expires_minutes: int = 60) -> str:
    """Mint a token shaped like the identity provider's; used by local tooling and tests."""
    now = dt.datetime.now(dt.timezone.utc)
    claims: dict[str, Any] = {
        "sub": user_id,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": now + dt.timedelta(minutes=expires_minutes),
    }
    if settings.session_audience:
        claims["aud"] = settings.session_audience
    return jwt.encode(claims, settings.SESSION_JWT_SECRET, algorithm=settings.SESSION_JWT_ALGORITHM)
