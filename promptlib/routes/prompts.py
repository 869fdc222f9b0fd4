from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from ..db import Store, StoreResult
from ..domain.taxonomy import Category, Department, PromptStatus
from ..logs import OperationLogContext
from ..services.prompt_svc import (
    create_prompt,
    delete_prompt,
    get_prompt,
    list_prompts,
    list_prompts_by_creator,
    update_prompt,
)
from .deps import get_store, require_user_id

router = APIRouter()
logger = logging.getLogger(__name__)


class PromptCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    department: Department
    category: Category
    prompt: str = Field(..., min_length=1)


class PromptPatch(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    department: Optional[Department] = None
    category: Optional[Category] = None
    prompt: Optional[str] = Field(None, min_length=1)


def _or_500(res: StoreResult, message: str) -> StoreResult:
    if res.failed:
        raise HTTPException(status_code=500, detail=message)
    return res


def _load_owned(store: Store, prompt_id: int, user_id: str, verb: str) -> dict:
    res = _or_500(get_prompt(store, prompt_id), f"Failed to {verb} prompt")
    if res.empty:
        raise HTTPException(status_code=404, detail="Prompt not found")
    if res.value["creator_id"] != user_id:
        raise HTTPException(status_code=403, detail=f"Unauthorized - you can only {verb} your own prompts")
    return res.value


@router.get("/api/prompts")
def api_prompts_list(
    department: Optional[Department] = Query(None),
    category: Optional[Category] = Query(None),
    status: PromptStatus = Query(PromptStatus.APPROVED),
    store: Store = Depends(get_store),
):
    res = _or_500(list_prompts(store, department=department, category=category, status=status),
                  "Failed to fetch prompts")
    return res.value or []


@router.post("/api/prompts", status_code=201)
def api_prompts_create(body: PromptCreate, user_id: str = Depends(require_user_id),
                       store: Store = Depends(get_store)):
    log = OperationLogContext(store, "CREATE_PROMPT", user_id)
    log.set_payload(body.model_dump(mode="json"))
    res = create_prompt(store, body.model_dump(), user_id, log)
    if not res.ok:
        log.write("ERROR", "create failed")
        raise HTTPException(status_code=500, detail="Failed to create prompt")
    log.write("OK")
    return {"message": "Prompt created successfully", "id": res.value["id"], "prompt": res.value}


@router.get("/api/prompts/my")
def api_prompts_my(user_id: str = Depends(require_user_id), store: Store = Depends(get_store)):
    res = _or_500(list_prompts_by_creator(store, user_id), "Failed to fetch prompts")
    return res.value or []


@router.get("/api/prompts/{prompt_id}")
def api_prompts_get(prompt_id: int, store: Store = Depends(get_store)):
    res = _or_500(get_prompt(store, prompt_id), "Failed to fetch prompt")
    if res.empty:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return res.value


def _apply_edit(store: Store, prompt_id: int, user_id: str, updates: dict, action: str):
    _load_owned(store, prompt_id, user_id, "edit")
    log = OperationLogContext(store, action, user_id)
    log.set_payload(updates)
    try:
        res = update_prompt(store, prompt_id, updates, log)
    except ValueError as ve:
        log.write("ERROR", str(ve))
        raise HTTPException(status_code=400, detail=str(ve))
    if res.failed:
        log.write("ERROR", "update failed")
        raise HTTPException(status_code=500, detail="Failed to update prompt")
    if res.empty:
        log.write("ERROR", "not found")
        raise HTTPException(status_code=404, detail="Prompt not found")
    log.write("OK")
    return {"message": "Prompt updated successfully", "prompt": res.value}


@router.put("/api/prompts/{prompt_id}")
def api_prompts_update(prompt_id: int, body: PromptCreate, user_id: str = Depends(require_user_id),
                       store: Store = Depends(get_store)):
    return _apply_edit(store, prompt_id, user_id, body.model_dump(mode="json"), "UPDATE_PROMPT")


@router.patch("/api/prompts/{prompt_id}")
def api_prompts_patch(prompt_id: int, body: PromptPatch, user_id: str = Depends(require_user_id),
                      store: Store = Depends(get_store)):
    updates = body.model_dump(mode="json", exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="At least one field is required")
    return _apply_edit(store, prompt_id, user_id, updates, "PATCH_PROMPT")


@router.delete("/api/prompts/{prompt_id}")
def api_prompts_delete(prompt_id: int, user_id: str = Depends(require_user_id),
                       store: Store = Depends(get_store)):
    _load_owned(store, prompt_id, user_id, "delete")
    log = OperationLogContext(store, "DELETE_PROMPT", user_id)
    res = delete_prompt(store, prompt_id, log)
    if res.failed:
        log.write("ERROR", "delete failed")
        raise HTTPException(status_code=500, detail="Failed to delete prompt")
    log.write("OK")
    return {"message": "Prompt deleted successfully"}
