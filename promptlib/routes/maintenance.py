from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException

from ..config import Settings
from ..db import Store
from ..logs import OperationLogContext
from ..services.seed_svc import seed_sample_prompts
from .deps import get_settings, get_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/init")
def api_init(store: Store = Depends(get_store)):
    try:
        store.init_schema()
    except sqlite3.Error as e:
        logger.error("schema init failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to initialize database")
    return {"message": "Database initialized successfully"}


@router.post("/api/seed")
def api_seed(store: Store = Depends(get_store), settings: Settings = Depends(get_settings)):
    if settings.is_production:
        raise HTTPException(status_code=403, detail="Seeding is not allowed in production")
    log = OperationLogContext(store, "SEED")
    try:
        created = seed_sample_prompts(store)
    except sqlite3.Error as e:
        logger.error("seeding failed: %s", e)
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail="Failed to seed database")
    log.set_after({"created": created})
    log.write("OK")
    return {"message": f"Successfully seeded database with {created} prompts", "created": created}
