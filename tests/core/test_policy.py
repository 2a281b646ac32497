"""Tests for authorization rules.

Critical Invariants:
- Users never create administrators or change roles
- Nobody changes their own role or deletes themselves
- Administrators are never editable or deletable through the store
- Users only touch their own tasks
- Decisions are specific: each denial names its reason
"""

import pytest

from adminflow import (
    Account,
    Actor,
    DenialReason,
    InvariantViolationError,
    Operation,
    PermissionDeniedError,
    PolicyContext,
    Role,
    Task,
    check,
)
from adminflow.core.policy import (
    Decision,
    can_create_account,
    can_delete_account,
    can_update_account,
    can_update_task,
    task_owner_for,
)

ADMIN = Actor(id="admin-1", name="Admin", email="admin@adminflow.com", role=Role.ADMIN)
OTHER_ADMIN = Actor(id="admin-9", name="Second", email="second@adminflow.com", role=Role.ADMIN)
USER = Actor(id="user-2", name="Joao", email="joao@example.com", role=Role.USER)

ADMIN_ACCOUNT = Account(id=ADMIN.id, name=ADMIN.name, email=ADMIN.email, role=Role.ADMIN)
USER_ACCOUNT = Account(id=USER.id, name=USER.name, email=USER.email, role=Role.USER)
THIRD_ACCOUNT = Account(id="user-3", name="Maria", email="maria@example.com", role=Role.USER)

CONTEXT = PolicyContext(default_admin_id="admin-1", admin_count=2)
SOLE_ADMIN = PolicyContext(default_admin_id="admin-1", admin_count=1)


@pytest.mark.parametrize(
    ("actor", "role", "reason"),
    [
        (ADMIN, Role.ADMIN, None),
        (ADMIN, Role.USER, None),
        (USER, Role.USER, None),
        (USER, Role.ADMIN, DenialReason.ADMIN_CREATION),
        (None, Role.USER, DenialReason.NOT_AUTHENTICATED),
    ],
    ids=["admin-admin", "admin-user", "user-user", "user-admin", "anonymous"],
)
def test_create_account(actor, role, reason):
    assert can_create_account(actor, role).reason is reason


@pytest.mark.parametrize(
    ("actor", "target", "patch", "reason"),
    [
        (ADMIN, USER_ACCOUNT, {"name": "New"}, None),
        (ADMIN, USER_ACCOUNT, {"role": Role.ADMIN}, None),
        (USER, USER_ACCOUNT, {"name": "Me"}, None),
        (USER, THIRD_ACCOUNT, {"email": "m@example.com"}, None),
        (USER, USER_ACCOUNT, {"role": Role.USER}, None),
        (ADMIN, ADMIN_ACCOUNT, {"name": "Root"}, DenialReason.ADMIN_PROTECTED),
        (OTHER_ADMIN, ADMIN_ACCOUNT, {"name": "Root"}, DenialReason.ADMIN_PROTECTED),
        (USER, USER_ACCOUNT, {"role": Role.ADMIN}, DenialReason.ROLE_ESCALATION),
        (USER, THIRD_ACCOUNT, {"role": "admin"}, DenialReason.ROLE_ESCALATION),
        (None, USER_ACCOUNT, {"name": "x"}, DenialReason.NOT_AUTHENTICATED),
    ],
    ids=[
        "admin-renames-user",
        "admin-promotes-user",
        "user-renames-self",
        "user-edits-other-user",
        "role-unchanged",
        "admin-edits-self",
        "admin-edits-admin",
        "user-self-promotion",
        "user-promotes-other",
        "anonymous",
    ],
)
def test_update_account(actor, target, patch, reason):
    assert can_update_account(actor, target, patch).reason is reason


def test_self_role_change_is_denied_for_non_admin_targets():
    """CRITICAL: an admin acting on a user record that is itself cannot change role.

    Only reachable when the session still says admin while the stored record
    was demoted; the rule must hold anyway.
    """
    stale_admin = Actor(id=USER.id, name=USER.name, email=USER.email, role=Role.ADMIN)

    decision = can_update_account(stale_admin, USER_ACCOUNT, {"role": Role.ADMIN})

    assert decision.reason is DenialReason.SELF_ROLE_CHANGE


@pytest.mark.parametrize(
    ("actor", "target", "context", "reason"),
    [
        (ADMIN, USER_ACCOUNT, CONTEXT, None),
        (USER, THIRD_ACCOUNT, CONTEXT, None),
        (ADMIN, ADMIN_ACCOUNT, CONTEXT, DenialReason.SELF_DELETE),
        (USER, USER_ACCOUNT, CONTEXT, DenialReason.SELF_DELETE),
        (OTHER_ADMIN, ADMIN_ACCOUNT, CONTEXT, DenialReason.ADMIN_PROTECTED),
        (USER, ADMIN_ACCOUNT, CONTEXT, DenialReason.ADMIN_PROTECTED),
        (None, USER_ACCOUNT, CONTEXT, DenialReason.NOT_AUTHENTICATED),
        (USER, ADMIN_ACCOUNT, SOLE_ADMIN, DenialReason.LAST_ADMIN),
        (OTHER_ADMIN, ADMIN_ACCOUNT, SOLE_ADMIN, DenialReason.LAST_ADMIN),
    ],
    ids=[
        "admin-deletes-user",
        "user-deletes-user",
        "admin-self",
        "user-self",
        "admin-deletes-admin",
        "user-deletes-admin",
        "anonymous",
        "user-deletes-sole-admin",
        "stale-admin-deletes-sole-admin",
    ],
)
def test_delete_account(actor, target, context, reason):
    assert can_delete_account(actor, target, context).reason is reason


def test_default_admin_is_protected_even_if_demoted():
    """CRITICAL: the default admin id is protected on its own, not only via role."""
    demoted = Account(id="admin-1", name="Admin", email="admin@adminflow.com", role=Role.USER)

    decision = can_delete_account(OTHER_ADMIN, demoted, CONTEXT)

    assert decision.reason is DenialReason.DEFAULT_ADMIN


@pytest.mark.parametrize(
    ("actor", "owner_id", "reason"),
    [
        (ADMIN, "user-3", None),
        (USER, USER.id, None),
        (USER, "user-3", DenialReason.NOT_OWNER),
        (None, USER.id, DenialReason.NOT_AUTHENTICATED),
    ],
    ids=["admin-any", "user-own", "user-foreign", "anonymous"],
)
@pytest.mark.parametrize(
    "operation", [Operation.UPDATE_TASK, Operation.DELETE_TASK, Operation.TOGGLE_TASK]
)
def test_task_ownership(operation, actor, owner_id, reason):
    task = Task(id="t1", title="T", description="D", owner_id=owner_id)

    assert check(actor, operation, task).reason is reason


def test_user_cannot_reassign_own_task():
    task = Task(id="t1", title="T", description="D", owner_id=USER.id)

    assert can_update_task(USER, task, {"owner_id": "user-3"}).reason is (
        DenialReason.OWNER_REASSIGNMENT
    )
    assert can_update_task(USER, task, {"owner_id": USER.id}).allowed
    assert can_update_task(ADMIN, task, {"owner_id": "user-3"}).allowed


@pytest.mark.parametrize(
    ("actor", "requested", "expected"),
    [
        (USER, "admin-1", USER.id),
        (USER, None, USER.id),
        (ADMIN, "user-2", "user-2"),
        (ADMIN, None, ADMIN.id),
    ],
    ids=["user-forced", "user-default", "admin-assigns", "admin-default"],
)
def test_task_owner_for(actor, requested, expected):
    """CRITICAL: users always own what they create."""
    assert task_owner_for(actor, requested) == expected


def test_create_task_requires_actor():
    assert check(ADMIN, Operation.CREATE_TASK).allowed
    assert check(None, Operation.CREATE_TASK).reason is DenialReason.NOT_AUTHENTICATED


def test_check_requires_target_for_targeted_operations():
    with pytest.raises(ValueError, match="requires a target"):
        check(ADMIN, Operation.DELETE_ACCOUNT)


def test_raise_if_denied_maps_reasons_to_errors():
    Decision.allow().raise_if_denied()

    with pytest.raises(PermissionDeniedError) as exc_info:
        Decision.deny(DenialReason.SELF_DELETE).raise_if_denied()
    assert exc_info.value.reason is DenialReason.SELF_DELETE
    assert not isinstance(exc_info.value, InvariantViolationError)

    with pytest.raises(InvariantViolationError):
        Decision.deny(DenialReason.LAST_ADMIN).raise_if_denied()
