"""AdminFlow: authorization-aware store for accounts and tasks.

Usage:
    from adminflow import EntityStore, SessionHolder, StoreSettings

    store = EntityStore.from_settings(StoreSettings())
    session = SessionHolder(store)

    admin = session.login("admin@adminflow.com", "anything")
    ana = store.create_account(admin, {"name": "Ana", "email": "ana@example.com"})
    task = store.create_task(admin, {"title": "Review", "description": "Code review",
                                     "owner_id": ana.id})
    store.toggle_status(admin, task.id)
"""

__version__ = "0.1.0"

# Configuration
from adminflow.config import StoreSettings

# Core primitives
from adminflow.core import (
    Account,
    AccountId,
    Actor,
    DashboardStats,
    Decision,
    DenialReason,
    Operation,
    PolicyContext,
    Role,
    Task,
    TaskId,
    TaskQuery,
    TaskStatus,
    WellKnownAccount,
    check,
)

# Errors
from adminflow.errors import (
    AdminFlowError,
    DuplicateEmailError,
    InvariantViolationError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
)

# Session
from adminflow.session import SessionHolder

# Storage
from adminflow.storage import FileStorage, LocalStorage, PersistenceAdapter, Storage

# Store
from adminflow.store import EntityStore, InvariantGuard

__all__ = [
    # Version
    "__version__",
    # Core
    "Account",
    "AccountId",
    "Actor",
    "Role",
    "Task",
    "TaskId",
    "TaskStatus",
    "WellKnownAccount",
    "Operation",
    "DenialReason",
    "Decision",
    "PolicyContext",
    "check",
    "TaskQuery",
    "DashboardStats",
    # Errors
    "AdminFlowError",
    "NotFoundError",
    "PermissionDeniedError",
    "InvariantViolationError",
    "DuplicateEmailError",
    "StorageError",
    # Storage
    "Storage",
    "LocalStorage",
    "FileStorage",
    "PersistenceAdapter",
    # Store
    "EntityStore",
    "InvariantGuard",
    # Session
    "SessionHolder",
    # Configuration
    "StoreSettings",
]
