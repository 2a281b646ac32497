"""Entity store and invariant guard.

Architecture Note:
    store/ is the stateful service layer. Unlike core/ (pure rules and
    models), it owns the live collections, serializes mutations and commits
    them through storage/.
"""

from adminflow.store.guard import InvariantGuard
from adminflow.store.store import ACCOUNT_FIELDS, TASK_FIELDS, EntityStore

__all__ = [
    "EntityStore",
    "InvariantGuard",
    "ACCOUNT_FIELDS",
    "TASK_FIELDS",
]
