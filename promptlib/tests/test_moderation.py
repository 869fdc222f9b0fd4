import pytest

from promptlib.domain import (
    CATEGORY_LABELS,
    DEPARTMENT_LABELS,
    Category,
    Department,
    InvalidTransition,
    PromptStatus,
    moderate,
    status_after_edit,
    status_on_create,
)
from promptlib.domain.moderation import _MODERATION_TRANSITIONS


def test_new_prompts_start_pending():
    assert status_on_create() is PromptStatus.PENDING


@pytest.mark.parametrize("current", list(PromptStatus))
def test_edit_always_returns_to_pending(current):
    assert status_after_edit(current) is PromptStatus.PENDING


def test_edit_rejects_unknown_status():
    with pytest.raises(ValueError):
        status_after_edit("archived")


@pytest.mark.parametrize(
    "current,target",
    [
        (PromptStatus.PENDING, PromptStatus.APPROVED),
        (PromptStatus.PENDING, PromptStatus.REJECTED),
        (PromptStatus.APPROVED, PromptStatus.REJECTED),
        (PromptStatus.REJECTED, PromptStatus.APPROVED),
    ],
)
def test_allowed_moderation(current, target):
    assert moderate(current, target) is target


@pytest.mark.parametrize(
    "current,target",
    [
        (PromptStatus.PENDING, PromptStatus.PENDING),
        (PromptStatus.APPROVED, PromptStatus.PENDING),
        (PromptStatus.APPROVED, PromptStatus.APPROVED),
        (PromptStatus.REJECTED, PromptStatus.REJECTED),
    ],
)
def test_disallowed_moderation(current, target):
    with pytest.raises(InvalidTransition):
        moderate(current, target)


def test_every_status_has_transitions():
    assert set(_MODERATION_TRANSITIONS) == set(PromptStatus)


def test_every_department_and_category_has_label():
    assert set(DEPARTMENT_LABELS) == set(Department)
    assert set(CATEGORY_LABELS) == set(Category)
    assert all(d.label for d in Department)
    assert all(c.label for c in Category)
