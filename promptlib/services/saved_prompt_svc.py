from __future__ import annotations

import enum
from typing import Optional

from ..db import Store, StoreResult, constraint_kind, safe_execute
from ..logs import OperationLogContext
from ..repository import saved_prompt_repo


class SaveOutcome(str, enum.Enum):
    SAVED = "saved"
    ALREADY_SAVED = "already_saved"
    PROMPT_NOT_FOUND = "prompt_not_found"
    ERROR = "error"


def save_prompt(store: Store, user_id: str, prompt_id: int,
                log: Optional[OperationLogContext] = None) -> SaveOutcome:
    """
    Bookmark a prompt with a single insert. The unique constraint is the only
    duplicate check: its violation is reported as ALREADY_SAVED, a foreign-key
    violation as PROMPT_NOT_FOUND.
    """
    res = safe_execute(store, lambda conn: saved_prompt_repo.save(conn, user_id, prompt_id),
                       write=True, name="saved_prompt_save")
    if log is not None:
        log.set_entity("SAVED_PROMPT", prompt_id)
    if not res.failed:
        return SaveOutcome.SAVED
    kind = constraint_kind(res.error)
    if kind == "unique":
        return SaveOutcome.ALREADY_SAVED
    if kind == "foreign_key":
        return SaveOutcome.PROMPT_NOT_FOUND
    return SaveOutcome.ERROR


def unsave_prompt(store: Store, user_id: str, prompt_id: int,
                  log: Optional[OperationLogContext] = None) -> StoreResult[int]:
    if log is not None:
        log.set_entity("SAVED_PROMPT", prompt_id)
    return safe_execute(store, lambda conn: saved_prompt_repo.unsave(conn, user_id, prompt_id),
                        write=True, name="saved_prompt_unsave")


def list_saved_prompts(store: Store, user_id: str) -> StoreResult[list]:
    return safe_execute(store, lambda conn: saved_prompt_repo.find_by_user(conn, user_id),
                        name="saved_prompt_find_by_user")


def is_saved(store: Store, user_id: str, prompt_id: int) -> StoreResult[bool]:
    return safe_execute(store, lambda conn: saved_prompt_repo.is_saved(conn, user_id, prompt_id),
                        name="saved_prompt_is_saved")
