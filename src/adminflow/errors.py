"""Domain exceptions raised by the entity store.

Every expected failure of a store operation maps to one of these. Callers
decide whether to retry or surface the message; the store never retries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adminflow.core.policy import DenialReason


class AdminFlowError(Exception):
    """Base exception for all AdminFlow domain failures."""


class NotFoundError(AdminFlowError):
    """Raised when a referenced account or task id is absent."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id!r} not found")


class PermissionDeniedError(AdminFlowError):
    """Raised when the policy rejects an operation.

    Attributes:
        reason: The specific denial reason reported by the policy.
    """

    def __init__(self, reason: DenialReason):
        self.reason = reason
        super().__init__(reason.message)


class InvariantViolationError(PermissionDeniedError):
    """Raised when a delete would leave the system without an administrator."""


class DuplicateEmailError(AdminFlowError):
    """Raised when two accounts would share the same email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"an account with email {email!r} already exists")


class StorageError(AdminFlowError):
    """Raised when a persisted record cannot be decoded or written."""
