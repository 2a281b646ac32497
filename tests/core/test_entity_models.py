"""Tests for entity models.

Critical Invariants:
- Toggling never leads to in_progress
- owner_name is never serialized
- Stored records decode back to equal entities
"""

from datetime import UTC, datetime

import pytest

from adminflow import Account, Actor, Role, Task, TaskStatus


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        (TaskStatus.PENDING, TaskStatus.COMPLETED),
        (TaskStatus.COMPLETED, TaskStatus.PENDING),
        (TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED),
    ],
    ids=["pending", "completed", "in_progress"],
)
def test_toggled_status(start, expected):
    """CRITICAL: in_progress toggles to completed and there is no way back to it."""
    assert start.toggled() is expected


def test_task_to_dict_omits_owner_name():
    """owner_name is derived at read time and must not be persisted."""
    task = Task(id="t1", title="T", description="D", owner_id="a1", owner_name="Ana")

    data = task.to_dict()

    assert "owner_name" not in data
    assert "userName" not in data
    assert data["userId"] == "a1"


def test_task_from_dict_ignores_stored_user_name():
    """Legacy records with a stored userName load without it."""
    stamp = datetime(2024, 1, 1, tzinfo=UTC).isoformat()
    task = Task.from_dict(
        {
            "id": "t1",
            "title": "T",
            "description": "D",
            "status": "in_progress",
            "userId": "2",
            "userName": "Stale Name",
            "createdAt": stamp,
            "updatedAt": stamp,
        }
    )

    assert task.owner_name is None
    assert task.status is TaskStatus.IN_PROGRESS
    assert task.owner_id == "2"


def test_account_dict_round_trip():
    account = Account(id="a1", name="Ana", email="ana@example.com", role=Role.ADMIN)

    assert Account.from_dict(account.to_dict()) == account


def test_actor_projection_from_account():
    account = Account(id="a1", name="Ana", email="ana@example.com", role=Role.USER)

    actor = Actor.from_account(account)

    assert actor == Actor(id="a1", name="Ana", email="ana@example.com", role=Role.USER)
    assert not actor.is_admin
    assert Actor.from_dict(actor.to_dict()) == actor
