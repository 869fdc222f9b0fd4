"""
Identity bridge between the external OAuth sign-in and local users.

The OAuth handshake itself happens upstream; this module receives the
verified profile, keeps the `users` table in sync, issues our own signed
token and turns tokens back into sessions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..config import Settings
from ..db import Store, StoreResult, safe_execute
from ..repository import user_repo

logger = logging.getLogger(__name__)


@dataclass
class SignInProfile:
    provider: str
    email: Optional[str]
    name: Optional[str] = None
    image: Optional[str] = None


@dataclass
class Session:
    email: Optional[str]
    name: Optional[str] = None
    image: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.user_id is not None

    def to_dict(self) -> dict:
        return {"user": {"id": self.user_id, "email": self.email, "name": self.name, "image": self.image}}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def user_id_for(email: str) -> str:
    """Stable user id: the normalized email."""
    return normalize_email(email)


def _domain_allowed(email: str, allowed_domain: Optional[str]) -> bool:
    if not allowed_domain:
        return True
    return email.endswith("@" + allowed_domain)


def sign_in(store: Store, profile: SignInProfile, settings: Settings) -> bool:
    """
    Handle a sign-in event. Upserts the user and returns False when the
    attempt must be rejected, including when the upsert itself fails.
    """
    if profile.provider not in settings.allowed_providers:
        logger.info("sign-in rejected: provider %s not allowed", profile.provider)
        return False
    if not profile.email or not profile.email.strip():
        logger.info("sign-in rejected: missing email (provider=%s)", profile.provider)
        return False

    email = normalize_email(profile.email)
    if not _domain_allowed(email, settings.allowed_domain):
        logger.info("sign-in rejected: %s outside domain %s", email, settings.allowed_domain)
        return False

    name = (profile.name or "").strip() or email.split("@", 1)[0]
    uid = user_id_for(email)

    res = safe_execute(
        store,
        lambda conn: user_repo.upsert(conn, uid, email, name, profile.image),
        write=True,
        name="user_upsert",
    )
    if res.failed:
        logger.error("sign-in rejected: could not upsert user %s", email)
        return False
    logger.info("sign-in ok: %s", email)
    return True


def find_user(store: Store, email: str) -> StoreResult[dict]:
    return safe_execute(store, lambda conn: user_repo.find_by_email(conn, normalize_email(email)),
                        name="user_find_by_email")


def issue_token(user: dict, settings: Settings, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    claims = {
        "sub": user["id"],
        "email": user["email"],
        "name": user.get("name"),
        "image": user.get("image"),
        "iat": now,
        "exp": now + timedelta(hours=settings.token_expire_hours),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> dict:
    """Verify and decode a token. Raises jwt.InvalidTokenError (or a subclass)."""
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def materialize_session(store: Store, claims: dict) -> Session:
    """
    Build the session for decoded token claims and attach the local user id.
    A missing user or a store failure leaves user_id unset.
    """
    session = Session(email=claims.get("email"), name=claims.get("name"), image=claims.get("image"))
    if not session.email:
        return session
    res = find_user(store, session.email)
    if res.failed:
        logger.warning("session lookup failed for %s; continuing without user id", session.email)
        return session
    if res.empty:
        logger.info("no local user for %s", session.email)
        return session
    session.user_id = res.value["id"]
    return session
