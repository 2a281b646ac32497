"""Entity models shared by the policy, the store and the storage codec."""

from adminflow.core.entity.models import Account, Actor, Role, Task, TaskStatus, utc_now

__all__ = [
    "Account",
    "Actor",
    "Role",
    "Task",
    "TaskStatus",
    "utc_now",
]
