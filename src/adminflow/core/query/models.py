"""Task queries and dashboard statistics.

Usage:
    query = TaskQuery(status=TaskStatus.PENDING, search="review")
    pending = [t for t in tasks if query.matches(t)]

    stats = DashboardStats.compute(actor, accounts, tasks)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from adminflow.core.entity import Account, Actor, Task, TaskStatus


@dataclass(frozen=True, slots=True)
class TaskQuery:
    """Filter over tasks.

    Attributes:
        status: Only tasks with this status (None matches all).
        search: Case-insensitive substring of title or description.
        owner_id: Only tasks owned by this account (None matches all).
    """

    status: TaskStatus | None = None
    search: str = ""
    owner_id: str | None = None

    def matches(self, task: Task) -> bool:
        if self.status is not None and task.status is not self.status:
            return False
        if self.owner_id is not None and task.owner_id != self.owner_id:
            return False
        if self.search:
            needle = self.search.lower()
            return needle in task.title.lower() or needle in task.description.lower()
        return True


@dataclass(frozen=True, slots=True)
class DashboardStats:
    """Headline counts shown to an actor.

    Admins see every task and the account total; users see only their own
    tasks and an account total of zero.
    """

    total_accounts: int
    total_tasks: int
    completed_tasks: int
    pending_tasks: int

    @classmethod
    def compute(
        cls, actor: Actor, accounts: Sequence[Account], tasks: Sequence[Task]
    ) -> DashboardStats:
        visible = tasks if actor.is_admin else [t for t in tasks if t.owner_id == actor.id]
        return cls(
            total_accounts=len(accounts) if actor.is_admin else 0,
            total_tasks=len(visible),
            completed_tasks=sum(1 for t in visible if t.status is TaskStatus.COMPLETED),
            pending_tasks=sum(1 for t in visible if t.status is TaskStatus.PENDING),
        )
