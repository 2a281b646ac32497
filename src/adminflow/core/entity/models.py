"""Entity models: accounts, tasks and the session actor projection.

Usage:
    account = Account(id=new_id(), name="Ana", email="ana@example.com", role=Role.USER)
    task = Task(id=new_id(), title="Review", description="...", owner_id=account.id)
    actor = Actor.from_account(account)

Records serialize to camelCase dicts matching the persisted format. The
derived ``owner_name`` field of a task is never serialized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from adminflow.core.identity import AccountId, TaskId


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class Role(str, Enum):
    """Account role."""

    ADMIN = "admin"
    USER = "user"


class TaskStatus(str, Enum):
    """Task lifecycle status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    def toggled(self) -> TaskStatus:
        """Status after a completion toggle.

        completed flips back to pending; anything else becomes completed.
        Toggling never leads to in_progress.
        """
        if self is TaskStatus.COMPLETED:
            return TaskStatus.PENDING
        return TaskStatus.COMPLETED


@dataclass(slots=True)
class Account:
    """A user account.

    Attributes:
        id: Opaque stable identifier.
        name: Display name.
        email: Login email, unique and case-sensitive as stored.
        role: Admin or ordinary user.
        created_at: Creation timestamp (UTC).
    """

    id: AccountId
    name: str
    email: str
    role: Role
    created_at: datetime = field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        """Create from dictionary (for deserialization)."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            role=Role(data["role"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
        )


@dataclass(slots=True)
class Task:
    """A work item assigned to an account.

    Attributes:
        id: Opaque stable identifier.
        title: Short title.
        description: Free-form description.
        owner_id: Id of the owning account.
        status: Lifecycle status.
        created_at: Creation timestamp (UTC).
        updated_at: Refreshed on every successful update or toggle.
        owner_name: Derived display field resolved at read time. Not persisted.
    """

    id: TaskId
    title: str
    description: str
    owner_id: AccountId
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    owner_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary (without owner_name)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "userId": self.owner_id,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Create from dictionary. A stored ``userName`` is ignored."""
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data["description"],
            owner_id=str(data["userId"]),
            status=TaskStatus(data["status"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )


@dataclass(frozen=True, slots=True)
class Actor:
    """Identity on whose behalf an operation is attempted.

    This is the minimal projection of an account kept by the session.
    """

    id: AccountId
    name: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @classmethod
    def from_account(cls, account: Account) -> Actor:
        return cls(id=account.id, name=account.name, email=account.email, role=account.role)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Actor:
        return cls(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            role=Role(data["role"]),
        )
