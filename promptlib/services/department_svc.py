from __future__ import annotations

from ..db import Store, StoreResult
from ..domain.taxonomy import Category, Department
from . import prompt_svc


def department_summary(store: Store) -> StoreResult[list]:
    """All departments in display order with approved-prompt counts (zero-filled)."""
    res = prompt_svc.count_approved_by_department(store)
    if res.failed:
        return res
    counts = res.value or {}
    return StoreResult.of([
        {"id": d.value, "name": d.label, "count": int(counts.get(d.value, 0))}
        for d in Department
    ])


def list_categories() -> list[dict]:
    return [{"id": c.value, "name": c.label} for c in Category]
