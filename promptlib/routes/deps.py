"""Request-scoped dependencies: store handle, settings and the caller's session."""
from __future__ import annotations

import logging
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException, Request

from ..config import Settings
from ..db import Store
from ..services.auth_svc import Session, decode_token, materialize_session

logger = logging.getLogger(__name__)


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_session(
    authorization: Optional[str] = Header(None),
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> Optional[Session]:
    token = _bearer(authorization)
    if token is None:
        return None
    try:
        claims = decode_token(token, settings)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning("invalid token: %s", e)
        raise HTTPException(status_code=401, detail="Invalid token")
    return materialize_session(store, claims)


def require_user_id(session: Optional[Session] = Depends(get_session)) -> str:
    if session is None or not session.authenticated:
        raise HTTPException(status_code=401, detail="Authentication required")
    return session.user_id


def require_admin(
    session: Optional[Session] = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> str:
    if session is None or not session.authenticated:
        raise HTTPException(status_code=401, detail="Authentication required")
    if (session.email or "").lower() not in settings.admin_emails:
        raise HTTPException(status_code=403, detail="Admin access required")
    return session.user_id
