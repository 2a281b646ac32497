"""Core functionalities: stateless models, identities and policy rules.

Architecture Note:
    core/ contains pure, stateless building blocks with no runtime state
    mutation. For stateful services, see store/, storage/ and session/.
"""

from adminflow.core.entity import Account, Actor, Role, Task, TaskStatus, utc_now
from adminflow.core.identity import AccountId, TaskId, WellKnownAccount, new_id
from adminflow.core.policy import DenialReason, Decision, Operation, PolicyContext, check
from adminflow.core.query import DashboardStats, TaskQuery

__all__ = [
    # Identity
    "AccountId",
    "TaskId",
    "WellKnownAccount",
    "new_id",
    # Entities
    "Account",
    "Actor",
    "Role",
    "Task",
    "TaskStatus",
    "utc_now",
    # Policy
    "DenialReason",
    "Decision",
    "Operation",
    "PolicyContext",
    "check",
    # Query
    "DashboardStats",
    "TaskQuery",
]
