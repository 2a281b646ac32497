"""Entity identity functionality: opaque ids and the well-known admin account."""

from adminflow.core.identity.models import AccountId, TaskId, WellKnownAccount, new_id

__all__ = [
    "AccountId",
    "TaskId",
    "WellKnownAccount",
    "new_id",
]
