# backend/pdf_rg/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt  # PyJWT

from pdf_rg.core.config import settings

ROLE_ADMIN = "admin"
ROLE_USER = "user"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    *, sub: str, role: str = ROLE_USER, extra: dict | None = None, minutes: int | None = None
) -> str:
    """Gera Access Token (type=access). `minutes` sobrescreve o default se passado."""
    now = _now()
    exp_min = minutes if minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": sub,
        "role": role,
        "type": "access",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=exp_min)).timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_token(token: str) -> dict:
    """Decodifica e valida um access token."""
    data = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    if data.get("type") != "access":
        raise jwt.InvalidTokenError("wrong token type")
    return data
