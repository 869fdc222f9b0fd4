from __future__ import annotations

from typing import Any, Optional

from ..db import Store, StoreResult, safe_execute
from ..domain.moderation import moderate, status_after_edit
from ..domain.taxonomy import Category, Department, PromptStatus
from ..logs import OperationLogContext
from ..repository import prompt_repo

DEFAULT_LIST_STATUS = PromptStatus.APPROVED


def create_prompt(store: Store, fields: dict[str, Any], creator_id: str,
                  log: Optional[OperationLogContext] = None) -> StoreResult[dict]:
    """Insert a new prompt (always pending) and return the stored row."""
    def _op(conn):
        new_id = prompt_repo.create(conn, fields, creator_id)
        return prompt_repo.find_by_id(conn, new_id)

    res = safe_execute(store, _op, write=True, name="prompt_create")
    if log is not None and res.ok:
        log.set_entity("PROMPT", res.value["id"])
        log.set_after(res.value)
    return res


def list_prompts(store: Store, department: Optional[Department] = None, category: Optional[Category] = None,
                 status: Optional[PromptStatus] = DEFAULT_LIST_STATUS) -> StoreResult[list]:
    return safe_execute(
        store,
        lambda conn: prompt_repo.find_all(conn, department=department, category=category, status=status),
        name="prompt_find_all",
    )


def get_prompt(store: Store, prompt_id: int) -> StoreResult[dict]:
    return safe_execute(store, lambda conn: prompt_repo.find_by_id(conn, prompt_id), name="prompt_find_by_id")


def list_prompts_by_creator(store: Store, creator_id: str) -> StoreResult[list]:
    return safe_execute(store, lambda conn: prompt_repo.find_by_creator(conn, creator_id),
                        name="prompt_find_by_creator")


def update_prompt(store: Store, prompt_id: int, updates: dict[str, Any],
                  log: Optional[OperationLogContext] = None) -> StoreResult[dict]:
    """
    Apply an edit and return the updated row. The prompt goes back to pending.
    Empty result when the prompt no longer exists.
    """
    def _op(conn):
        before = prompt_repo.find_by_id(conn, prompt_id)
        if before is None:
            return None
        new_status = status_after_edit(PromptStatus(before["status"]))
        prompt_repo.update(conn, prompt_id, updates, new_status)
        after = prompt_repo.find_by_id(conn, prompt_id)
        if log is not None:
            log.set_entity("PROMPT", prompt_id)
            log.set_before(before)
            log.set_after(after)
        return after

    return safe_execute(store, _op, write=True, name="prompt_update")


def delete_prompt(store: Store, prompt_id: int, log: Optional[OperationLogContext] = None) -> StoreResult[int]:
    """Delete the prompt and its bookmarks. Value is the number of prompt rows removed."""
    def _op(conn):
        before = prompt_repo.find_by_id(conn, prompt_id)
        n = prompt_repo.delete(conn, prompt_id)
        if log is not None:
            log.set_entity("PROMPT", prompt_id)
            log.set_before(before)
        return n or None

    return safe_execute(store, _op, write=True, name="prompt_delete")


def moderate_prompt(store: Store, prompt_id: int, target: PromptStatus,
                    log: Optional[OperationLogContext] = None) -> StoreResult[dict]:
    """
    Move a prompt to approved/rejected. Raises InvalidTransition for
    transitions the lifecycle does not allow; empty result when absent.
    """
    def _op(conn):
        before = prompt_repo.find_by_id(conn, prompt_id)
        if before is None:
            return None
        new_status = moderate(PromptStatus(before["status"]), target)
        prompt_repo.set_status(conn, prompt_id, new_status)
        after = prompt_repo.find_by_id(conn, prompt_id)
        if log is not None:
            log.set_entity("PROMPT", prompt_id)
            log.set_before({"status": before["status"]})
            log.set_after({"status": after["status"]})
        return after

    return safe_execute(store, _op, write=True, name="prompt_moderate")


def count_approved_by_department(store: Store) -> StoreResult[dict]:
    return safe_execute(store, prompt_repo.count_approved_by_department, name="prompt_count_by_department")
