from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..db import Store
from ..logs import OperationLogContext
from ..services.prompt_svc import get_prompt
from ..services.saved_prompt_svc import SaveOutcome, is_saved, list_saved_prompts, save_prompt, unsave_prompt
from .deps import get_store, require_user_id

router = APIRouter()


@router.get("/api/prompts/saved")
def api_saved_list(user_id: str = Depends(require_user_id), store: Store = Depends(get_store)):
    res = list_saved_prompts(store, user_id)
    if res.failed:
        raise HTTPException(status_code=500, detail="Failed to fetch saved prompts")
    return res.value or []


@router.post("/api/prompts/{prompt_id}/save")
def api_saved_save(prompt_id: int, user_id: str = Depends(require_user_id), store: Store = Depends(get_store)):
    found = get_prompt(store, prompt_id)
    if found.failed:
        raise HTTPException(status_code=500, detail="Failed to save prompt")
    if found.empty:
        raise HTTPException(status_code=404, detail="Prompt not found")

    log = OperationLogContext(store, "SAVE_PROMPT", user_id)
    outcome = save_prompt(store, user_id, prompt_id, log)
    log.write("OK" if outcome is SaveOutcome.SAVED else "ERROR",
              None if outcome is SaveOutcome.SAVED else outcome.value)
    if outcome is SaveOutcome.ALREADY_SAVED:
        raise HTTPException(status_code=400, detail="Prompt already saved")
    if outcome is SaveOutcome.PROMPT_NOT_FOUND:
        raise HTTPException(status_code=404, detail="Prompt not found")
    if outcome is SaveOutcome.ERROR:
        raise HTTPException(status_code=500, detail="Failed to save prompt")
    return {"message": "Prompt saved successfully"}


@router.delete("/api/prompts/{prompt_id}/save")
def api_saved_unsave(prompt_id: int, user_id: str = Depends(require_user_id), store: Store = Depends(get_store)):
    log = OperationLogContext(store, "UNSAVE_PROMPT", user_id)
    res = unsave_prompt(store, user_id, prompt_id, log)
    if res.failed:
        log.write("ERROR", "unsave failed")
        raise HTTPException(status_code=500, detail="Failed to unsave prompt")
    log.write("OK")
    return {"message": "Prompt unsaved successfully"}


@router.get("/api/prompts/{prompt_id}/save")
def api_saved_status(prompt_id: int, user_id: str = Depends(require_user_id), store: Store = Depends(get_store)):
    res = is_saved(store, user_id, prompt_id)
    if res.failed:
        raise HTTPException(status_code=500, detail="Failed to check saved state")
    return {"saved": bool(res.value)}
