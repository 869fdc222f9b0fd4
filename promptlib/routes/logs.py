from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..db import Store
from ..logs import search_logs
from .deps import get_store, require_admin

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
    action: str | None = None,
    query: str | None = None,
    ts_from: str | None = None,
    ts_to: str | None = None,
    _admin_id: str = Depends(require_admin),
    store: Store = Depends(get_store),
):
    total, items = search_logs(store, query, action, ts_from, ts_to, page, size)
    return {"total": total, "items": items}
