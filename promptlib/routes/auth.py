from __future__ import annotations

import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel

from ..config import Settings
from ..db import Store
from ..logs import OperationLogContext
from ..services.auth_svc import Session, SignInProfile, find_user, issue_token, sign_in
from .deps import get_session, get_settings, get_store

router = APIRouter()
logger = logging.getLogger(__name__)


class SignInBody(BaseModel):
    provider: str
    email: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None


def _check_callback_secret(settings: Settings, presented: Optional[str]):
    """Sign-in is only accepted from the OAuth front that shares the callback secret."""
    if not settings.callback_secret:
        logger.error("sign-in refused: callback_secret is not configured")
        raise HTTPException(status_code=401, detail="Invalid callback secret")
    if not presented or not hmac.compare_digest(presented, settings.callback_secret):
        raise HTTPException(status_code=401, detail="Invalid callback secret")


@router.post("/api/auth/signin")
def api_auth_signin(
    body: SignInBody,
    x_auth_callback_secret: Optional[str] = Header(None),
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    _check_callback_secret(settings, x_auth_callback_secret)
    log = OperationLogContext(store, "SIGN_IN", body.email)
    log.set_payload({"provider": body.provider, "email": body.email})

    if not sign_in(store, SignInProfile(body.provider, body.email, body.name, body.image), settings):
        log.write("ERROR", "sign-in rejected")
        raise HTTPException(status_code=403, detail="Sign-in rejected")

    res = find_user(store, body.email)
    if not res.ok:
        log.write("ERROR", "user lookup failed")
        raise HTTPException(status_code=500, detail="Failed to complete sign-in")
    user = res.value
    log.set_entity("USER", user["id"])
    log.write("OK")
    return {
        "access_token": issue_token(user, settings),
        "token_type": "bearer",
        "user": {"id": user["id"], "email": user["email"], "name": user["name"], "image": user["image"]},
    }


@router.get("/api/auth/session")
def api_auth_session(session: Optional[Session] = Depends(get_session)):
    if session is None:
        return {"user": None}
    return session.to_dict()
