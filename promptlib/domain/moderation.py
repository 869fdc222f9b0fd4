"""
Moderation lifecycle of a prompt.

pending   -- initial state, and the state after any edit
approved  -- publicly listable
rejected  -- hidden; can still be approved later

Only `moderate()` moves a prompt out of pending. Edits always send it back.
"""
from __future__ import annotations

from .taxonomy import PromptStatus


class InvalidTransition(ValueError):
    def __init__(self, current: PromptStatus, target: PromptStatus):
        super().__init__(f"cannot move prompt from {current.value} to {target.value}")
        self.current = current
        self.target = target


_MODERATION_TRANSITIONS: dict[PromptStatus, frozenset[PromptStatus]] = {
    PromptStatus.PENDING: frozenset({PromptStatus.APPROVED, PromptStatus.REJECTED}),
    PromptStatus.APPROVED: frozenset({PromptStatus.REJECTED}),
    PromptStatus.REJECTED: frozenset({PromptStatus.APPROVED}),
}


def status_on_create() -> PromptStatus:
    return PromptStatus.PENDING


def status_after_edit(current: PromptStatus) -> PromptStatus:
    PromptStatus(current)  # unknown values raise ValueError
    return PromptStatus.PENDING


def moderate(current: PromptStatus, target: PromptStatus) -> PromptStatus:
    current = PromptStatus(current)
    target = PromptStatus(target)
    if target not in _MODERATION_TRANSITIONS[current]:
        raise InvalidTransition(current, target)
    return target
