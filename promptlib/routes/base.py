import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException

from .. import __version__
from ..db import Store
from .deps import get_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health(store: Store = Depends(get_store)):
    try:
        store.ping()
    except sqlite3.Error as e:
        logger.error("health check failed: %s", e)
        raise HTTPException(status_code=500, detail="Database unavailable")
    return {"status": "ok", "db": "ok"}


@router.get("/version")
def version():
    return {"app": "promptlib-api", "version": __version__}
