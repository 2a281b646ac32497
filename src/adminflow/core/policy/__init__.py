"""Authorization policy: pure allow/deny decisions for store mutations."""

from adminflow.core.policy.models import DenialReason, Decision, Operation, PolicyContext
from adminflow.core.policy.rules import (
    can_create_account,
    can_create_task,
    can_delete_account,
    can_modify_task,
    can_update_account,
    can_update_task,
    check,
    task_owner_for,
)

__all__ = [
    "DenialReason",
    "Decision",
    "Operation",
    "PolicyContext",
    "check",
    "can_create_account",
    "can_update_account",
    "can_delete_account",
    "can_create_task",
    "can_modify_task",
    "can_update_task",
    "task_owner_for",
]
