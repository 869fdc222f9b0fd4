from .taxonomy import Category, Department, PromptStatus, CATEGORY_LABELS, DEPARTMENT_LABELS
from .moderation import (
    InvalidTransition,
    moderate,
    status_after_edit,
    status_on_create,
)

__all__ = [
    "Category",
    "Department",
    "PromptStatus",
    "CATEGORY_LABELS",
    "DEPARTMENT_LABELS",
    "InvalidTransition",
    "moderate",
    "status_after_edit",
    "status_on_create",
]
