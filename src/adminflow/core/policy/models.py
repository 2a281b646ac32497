"""Policy models: operations, denial reasons and decisions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from adminflow.core.identity import AccountId, WellKnownAccount
from adminflow.errors import InvariantViolationError, PermissionDeniedError


class Operation(Enum):
    """Mutating operation an actor intends to perform."""

    CREATE_ACCOUNT = auto()
    UPDATE_ACCOUNT = auto()
    DELETE_ACCOUNT = auto()
    CREATE_TASK = auto()
    UPDATE_TASK = auto()
    DELETE_TASK = auto()
    TOGGLE_TASK = auto()


class DenialReason(Enum):
    """Why the policy rejected an operation. Values are user-facing messages."""

    NOT_AUTHENTICATED = "not authenticated"
    ADMIN_CREATION = "users cannot create administrators"
    ADMIN_PROTECTED = "administrators cannot be modified or deleted"
    ROLE_ESCALATION = "users cannot change roles"
    SELF_ROLE_CHANGE = "you cannot change your own role"
    SELF_DELETE = "you cannot delete your own account"
    DEFAULT_ADMIN = "the default administrator cannot be deleted"
    LAST_ADMIN = "the last administrator cannot be removed"
    NOT_OWNER = "not the task owner"
    OWNER_REASSIGNMENT = "users cannot reassign their tasks"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of a policy check: allowed, or denied with a reason."""

    reason: DenialReason | None = None

    @property
    def allowed(self) -> bool:
        return self.reason is None

    @classmethod
    def allow(cls) -> Decision:
        return _ALLOW

    @classmethod
    def deny(cls, reason: DenialReason) -> Decision:
        return cls(reason=reason)

    def raise_if_denied(self) -> None:
        """Raise the matching domain error when this decision is a denial.

        Raises:
            InvariantViolationError: If denied because no admin would remain.
            PermissionDeniedError: For every other denial.
        """
        if self.reason is None:
            return
        if self.reason is DenialReason.LAST_ADMIN:
            raise InvariantViolationError(self.reason)
        raise PermissionDeniedError(self.reason)


_ALLOW = Decision()


@dataclass(frozen=True, slots=True)
class PolicyContext:
    """Snapshot of store-wide facts some rules need.

    Attributes:
        default_admin_id: Id of the account that can never be removed.
        admin_count: Number of admin accounts at check time.
    """

    default_admin_id: AccountId = WellKnownAccount.DEFAULT_ADMIN_ID
    admin_count: int = 1
