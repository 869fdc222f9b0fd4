from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..db import Store
from ..services.department_svc import department_summary, list_categories
from .deps import get_store

router = APIRouter()


@router.get("/api/departments")
def api_departments(store: Store = Depends(get_store)):
    res = department_summary(store)
    if res.failed:
        raise HTTPException(status_code=500, detail="Failed to fetch department information")
    return res.value


@router.get("/api/categories")
def api_categories():
    return list_categories()
