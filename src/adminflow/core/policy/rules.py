"""Authorization rules for account and task mutations.

Usage:
    decision = check(actor, Operation.DELETE_ACCOUNT, target=account, context=ctx)
    decision.raise_if_denied()

    # Or call a rule directly
    can_update_account(actor, target, {"role": Role.ADMIN})

All rules are pure: they read their arguments and return a Decision. Nothing
here touches storage; the store gathers the PolicyContext snapshot under its
lock and applies the mutation only after an allowed decision.

Patches are plain mappings of snake_case field names to new values.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from adminflow.core.entity import Account, Actor, Role, Task
from adminflow.core.identity import AccountId
from adminflow.core.policy.models import DenialReason, Decision, Operation, PolicyContext


def _changes_role(target: Account, patch: Mapping[str, Any]) -> bool:
    role = patch.get("role")
    return role is not None and Role(role) is not target.role


def can_create_account(actor: Actor | None, role: Role) -> Decision:
    """Users may create ordinary accounts but never administrators."""
    if actor is None:
        return Decision.deny(DenialReason.NOT_AUTHENTICATED)
    if not actor.is_admin and role is Role.ADMIN:
        return Decision.deny(DenialReason.ADMIN_CREATION)
    return Decision.allow()


def can_update_account(actor: Actor | None, target: Account, patch: Mapping[str, Any]) -> Decision:
    """Check an account update.

    Administrators are never editable through this path. Users cannot touch
    roles at all, and nobody can change their own role.
    """
    if actor is None:
        return Decision.deny(DenialReason.NOT_AUTHENTICATED)
    if target.is_admin:
        return Decision.deny(DenialReason.ADMIN_PROTECTED)
    if not actor.is_admin and _changes_role(target, patch):
        return Decision.deny(DenialReason.ROLE_ESCALATION)
    if actor.id == target.id and _changes_role(target, patch):
        return Decision.deny(DenialReason.SELF_ROLE_CHANGE)
    return Decision.allow()


def can_delete_account(actor: Actor | None, target: Account, context: PolicyContext) -> Decision:
    """Check an account deletion.

    Removing the only administrator is reported as LAST_ADMIN before the
    general admin-protection rule, so the store raises InvariantViolationError
    for it. The default-admin rule holds even for a demoted record.
    """
    if actor is None:
        return Decision.deny(DenialReason.NOT_AUTHENTICATED)
    if target.id == actor.id:
        return Decision.deny(DenialReason.SELF_DELETE)
    if target.is_admin and context.admin_count <= 1:
        return Decision.deny(DenialReason.LAST_ADMIN)
    if target.is_admin:
        return Decision.deny(DenialReason.ADMIN_PROTECTED)
    if target.id == context.default_admin_id:
        return Decision.deny(DenialReason.DEFAULT_ADMIN)
    return Decision.allow()


def task_owner_for(actor: Actor, requested_owner_id: AccountId | None) -> AccountId:
    """Owner a new task actually gets.

    Users always own what they create; admins may assign any owner and
    default to themselves.
    """
    if not actor.is_admin or requested_owner_id is None:
        return actor.id
    return requested_owner_id


def can_create_task(actor: Actor | None) -> Decision:
    """Any authenticated actor may create tasks."""
    if actor is None:
        return Decision.deny(DenialReason.NOT_AUTHENTICATED)
    return Decision.allow()


def can_modify_task(actor: Actor | None, task: Task) -> Decision:
    """Admins may modify any task; users only their own.

    Covers update, delete and status toggling.
    """
    if actor is None:
        return Decision.deny(DenialReason.NOT_AUTHENTICATED)
    if actor.is_admin or task.owner_id == actor.id:
        return Decision.allow()
    return Decision.deny(DenialReason.NOT_OWNER)


def can_update_task(actor: Actor | None, task: Task, patch: Mapping[str, Any]) -> Decision:
    """Ownership check plus: users cannot hand their task to someone else."""
    if actor is None:
        return Decision.deny(DenialReason.NOT_AUTHENTICATED)
    decision = can_modify_task(actor, task)
    if not decision.allowed:
        return decision
    owner_id = patch.get("owner_id")
    if not actor.is_admin and owner_id is not None and owner_id != actor.id:
        return Decision.deny(DenialReason.OWNER_REASSIGNMENT)
    return Decision.allow()


_Rule = Callable[[Actor | None, Any, Mapping[str, Any], PolicyContext], Decision]

_RULES: dict[Operation, _Rule] = {
    Operation.CREATE_ACCOUNT: lambda a, _t, p, _c: can_create_account(
        a, Role(p.get("role", Role.USER))
    ),
    Operation.UPDATE_ACCOUNT: lambda a, t, p, _c: can_update_account(a, t, p),
    Operation.DELETE_ACCOUNT: lambda a, t, _p, c: can_delete_account(a, t, c),
    Operation.CREATE_TASK: lambda a, _t, _p, _c: can_create_task(a),
    Operation.UPDATE_TASK: lambda a, t, p, _c: can_update_task(a, t, p),
    Operation.DELETE_TASK: lambda a, t, _p, _c: can_modify_task(a, t),
    Operation.TOGGLE_TASK: lambda a, t, _p, _c: can_modify_task(a, t),
}


def check(
    actor: Actor | None,
    operation: Operation,
    target: Account | Task | None = None,
    patch: Mapping[str, Any] | None = None,
    context: PolicyContext | None = None,
) -> Decision:
    """Decide whether actor may perform operation on target.

    Args:
        actor: Acting identity, or None when nobody is logged in.
        operation: Intended mutation.
        target: Existing entity for update/delete/toggle operations.
        patch: Requested field values (creation data or update patch).
        context: Store-wide facts; defaults to a single-admin context.

    Returns:
        Decision, allowed or carrying the denial reason.

    Raises:
        ValueError: If an operation that needs a target was given none.
    """
    if target is None and operation not in (Operation.CREATE_ACCOUNT, Operation.CREATE_TASK):
        raise ValueError(f"{operation.name} requires a target")
    return _RULES[operation](actor, target, patch or {}, context or PolicyContext())
