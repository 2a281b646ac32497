"""EntityStore: authorization-aware store for accounts and tasks.

Usage:
    store = EntityStore.from_settings(StoreSettings(data_dir="data"))

    admin = Actor.from_account(store.login("admin@adminflow.com"))
    ana = store.create_account(admin, {"name": "Ana", "email": "ana@example.com"})
    task = store.create_task(admin, {"title": "Review", "description": "...",
                                     "owner_id": ana.id})
    store.toggle_status(admin, task.id)
    store.delete_account(admin, ana.id)  # cascades to Ana's tasks

Every mutation runs under one writer lock: existence check, policy check,
in-memory mutation, invariant repair and persistence happen as one step.
On any failure inside that step the in-memory collections roll back to
their state before the call.
"""

from __future__ import annotations

import copy as cp
import logging
import threading
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, cast

from adminflow.config import StoreSettings
from adminflow.core.entity import Account, Actor, Role, Task, TaskStatus, utc_now
from adminflow.core.identity import AccountId, TaskId, new_id
from adminflow.core.policy import DenialReason, Operation, PolicyContext, check, task_owner_for
from adminflow.core.query import DashboardStats, TaskQuery
from adminflow.errors import DuplicateEmailError, NotFoundError, PermissionDeniedError
from adminflow.storage import FileStorage, LocalStorage, PersistenceAdapter
from adminflow.store.guard import InvariantGuard

logger = logging.getLogger(__name__)

ACCOUNT_FIELDS = frozenset({"name", "email", "role"})
TASK_FIELDS = frozenset({"title", "description", "status", "owner_id"})


def _validate_fields(kind: str, data: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"{kind} fields {sorted(unknown)} are unknown or immutable")


class EntityStore:
    """Owns the account and task collections and guards every mutation.

    The store holds no session state: each mutating operation takes the
    acting identity as its first argument.

    Args:
        adapter: Persistence adapter (default: in-memory backend).
        settings: Store configuration (default: loaded from environment).
    """

    def __init__(
        self,
        adapter: PersistenceAdapter | None = None,
        settings: StoreSettings | None = None,
    ):
        self._settings = settings or StoreSettings()
        self._adapter = adapter or PersistenceAdapter()
        self._guard = InvariantGuard(self._settings)
        self._lock = threading.RLock()

        self._accounts, self._tasks = self._adapter.load()
        if self._guard.repair(self._accounts):
            self._adapter.save(self._accounts, self._tasks)
        logger.info(
            "EntityStore ready accounts=%d tasks=%d",
            len(self._accounts),
            len(self._tasks),
        )

    @classmethod
    def from_settings(cls, settings: StoreSettings | None = None) -> EntityStore:
        """Build a store whose backend matches the settings.

        Args:
            settings: Configuration; data_dir selects FileStorage, else LocalStorage.

        Returns:
            A ready EntityStore.
        """
        settings = settings or StoreSettings()
        backend = FileStorage(settings.data_dir) if settings.data_dir else LocalStorage()
        return cls(PersistenceAdapter(backend), settings)

    # ---- internals ----

    def _settle(self) -> None:
        if self._settings.latency > 0:
            time.sleep(self._settings.latency)

    @contextmanager
    def _transaction(self, *, accounts_changed: bool) -> Iterator[None]:
        """Serialize a mutation and commit it, or roll it back on error.

        Args:
            accounts_changed: Whether the invariant guard must run before saving.
        """
        self._settle()
        with self._lock:
            accounts, tasks = list(self._accounts), list(self._tasks)
            try:
                yield
                if accounts_changed:
                    self._guard.repair(self._accounts)
                self._adapter.save(self._accounts, self._tasks)
            except PermissionDeniedError as e:
                self._accounts, self._tasks = accounts, tasks
                logger.warning("Denied: %s", e.reason.message)
                raise
            except BaseException:
                self._accounts, self._tasks = accounts, tasks
                raise

    def _account_index(self, account_id: AccountId) -> int:
        for index, account in enumerate(self._accounts):
            if account.id == account_id:
                return index
        raise NotFoundError("account", account_id)

    def _task_index(self, task_id: TaskId) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise NotFoundError("task", task_id)

    def _ensure_email_free(self, email: str, owner_id: AccountId | None = None) -> None:
        if any(a.email == email and a.id != owner_id for a in self._accounts):
            raise DuplicateEmailError(email)

    def _policy_context(self) -> PolicyContext:
        return PolicyContext(
            default_admin_id=self._guard.default_admin_id,
            admin_count=sum(1 for a in self._accounts if a.is_admin),
        )

    def _present(self, task: Task) -> Task:
        """Copy of task with owner_name resolved from the live accounts."""
        owner = next((a for a in self._accounts if a.id == task.owner_id), None)
        name = owner.name if owner is not None else self._settings.unknown_owner_name
        return replace(task, owner_name=name)

    # ---- accounts ----

    def list_accounts(self) -> list[Account]:
        """All accounts, as copies, in stored order."""
        self._settle()
        with self._lock:
            return cp.deepcopy(self._accounts)

    def get_account(self, account_id: AccountId) -> Account:
        """Get one account.

        Raises:
            NotFoundError: If no account has this id.
        """
        self._settle()
        with self._lock:
            return cp.deepcopy(self._accounts[self._account_index(account_id)])

    def create_account(self, actor: Actor | None, data: Mapping[str, Any]) -> Account:
        """Create an account.

        Args:
            actor: Acting identity.
            data: ``name`` and ``email`` (required) and ``role`` (default user).

        Returns:
            Copy of the new account.

        Raises:
            PermissionDeniedError: If the policy rejects the creation.
            DuplicateEmailError: If the email is already in use.
            ValueError: If data has unknown fields.
        """
        _validate_fields("account", data, ACCOUNT_FIELDS)
        role = Role(data.get("role", Role.USER))
        with self._transaction(accounts_changed=True):
            check(actor, Operation.CREATE_ACCOUNT, patch={"role": role}).raise_if_denied()
            self._ensure_email_free(data["email"])
            account = Account(id=new_id(), name=data["name"], email=data["email"], role=role)
            self._accounts.append(account)
        logger.info("Account created id=%s role=%s", account.id, role.value)
        return cp.deepcopy(account)

    def update_account(
        self, actor: Actor | None, account_id: AccountId, patch: Mapping[str, Any]
    ) -> Account:
        """Apply a patch to an account.

        Args:
            actor: Acting identity.
            account_id: Account to modify.
            patch: Any of ``name``, ``email``, ``role``.

        Returns:
            Copy of the updated account.

        Raises:
            NotFoundError: If the account does not exist.
            PermissionDeniedError: If the policy rejects the update.
            DuplicateEmailError: If the new email belongs to another account.
            ValueError: If patch has unknown or immutable fields.
        """
        _validate_fields("account", patch, ACCOUNT_FIELDS)
        changes = dict(patch)
        if "role" in changes:
            changes["role"] = Role(changes["role"])
        with self._transaction(accounts_changed=True):
            index = self._account_index(account_id)
            target = self._accounts[index]
            check(actor, Operation.UPDATE_ACCOUNT, target, changes).raise_if_denied()
            if "email" in changes:
                self._ensure_email_free(changes["email"], owner_id=account_id)
            updated = replace(target, **changes)
            self._accounts[index] = updated
        logger.info("Account updated id=%s fields=%s", account_id, sorted(changes))
        return cp.deepcopy(updated)

    def delete_account(self, actor: Actor | None, account_id: AccountId) -> None:
        """Delete an account and every task it owns.

        Raises:
            NotFoundError: If the account does not exist.
            InvariantViolationError: If no administrator would remain.
            PermissionDeniedError: For any other policy rejection.
        """
        with self._transaction(accounts_changed=True):
            index = self._account_index(account_id)
            target = self._accounts[index]
            context = self._policy_context()
            check(actor, Operation.DELETE_ACCOUNT, target, context=context).raise_if_denied()
            del self._accounts[index]
            before = len(self._tasks)
            self._tasks = [t for t in self._tasks if t.owner_id != account_id]
            removed = before - len(self._tasks)
        logger.info("Account deleted id=%s cascaded_tasks=%d", account_id, removed)

    def login(self, email: str) -> Account:
        """Resolve the account for email, provisioning one when unknown.

        No credential is verified. The default-admin email always resolves to
        an administrator: the record is re-created or re-promoted if needed.
        Unknown emails get a new role=user account named after the email's
        local part.

        Args:
            email: Login email, matched exactly.

        Returns:
            Copy of the resolved account.
        """
        self._settle()
        with self._lock:
            accounts, tasks = list(self._accounts), list(self._tasks)
            try:
                changed = self._guard.repair(self._accounts)
                account, provisioned = self._resolve_login(email)
                if changed or provisioned:
                    self._adapter.save(self._accounts, self._tasks)
            except BaseException:
                self._accounts, self._tasks = accounts, tasks
                raise
            return cp.deepcopy(account)

    def _resolve_login(self, email: str) -> tuple[Account, bool]:
        for index, account in enumerate(self._accounts):
            if account.email != email:
                continue
            if email == self._guard.default_admin_email and not account.is_admin:
                account = replace(account, role=Role.ADMIN)
                self._accounts[index] = account
                logger.warning("Re-promoted default admin email %s", email)
                return account, True
            return account, False

        if email == self._guard.default_admin_email:
            account = self._guard.default_admin()
            if any(a.id == account.id for a in self._accounts):
                account = replace(account, id=new_id())
            self._accounts.insert(0, account)
            logger.warning("Re-created default admin for login id=%s", account.id)
            return account, True

        account = Account(id=new_id(), name=email.split("@")[0], email=email, role=Role.USER)
        self._accounts.append(account)
        logger.info("Account provisioned on login id=%s", account.id)
        return account, True

    # ---- tasks ----

    def list_tasks(self, query: TaskQuery | None = None) -> list[Task]:
        """Tasks with owner_name resolved, optionally filtered.

        Args:
            query: Optional filter over status, owner and text.

        Returns:
            Matching task copies in stored order.
        """
        self._settle()
        with self._lock:
            return [self._present(t) for t in self._tasks if query is None or query.matches(t)]

    def get_task(self, task_id: TaskId) -> Task:
        """Get one task with owner_name resolved.

        Raises:
            NotFoundError: If no task has this id.
        """
        self._settle()
        with self._lock:
            return self._present(self._tasks[self._task_index(task_id)])

    def create_task(self, actor: Actor | None, data: Mapping[str, Any]) -> Task:
        """Create a task.

        Users always own the tasks they create, whatever ``owner_id`` says.

        Args:
            actor: Acting identity.
            data: ``title`` and ``description`` (required), ``status``
                (default pending) and ``owner_id`` (default the actor).

        Returns:
            Copy of the new task with owner_name resolved.

        Raises:
            PermissionDeniedError: If nobody is logged in.
            NotFoundError: If the owner account does not exist.
            ValueError: If data has unknown fields.
        """
        _validate_fields("task", data, TASK_FIELDS)
        with self._transaction(accounts_changed=False):
            check(actor, Operation.CREATE_TASK).raise_if_denied()
            owner_id = task_owner_for(cast(Actor, actor), data.get("owner_id"))
            self._account_index(owner_id)
            now = utc_now()
            task = Task(
                id=new_id(),
                title=data["title"],
                description=data["description"],
                owner_id=owner_id,
                status=TaskStatus(data.get("status", TaskStatus.PENDING)),
                created_at=now,
                updated_at=now,
            )
            self._tasks.append(task)
            result = self._present(task)
        logger.debug("Task created id=%s owner=%s", task.id, owner_id)
        return result

    def update_task(self, actor: Actor | None, task_id: TaskId, patch: Mapping[str, Any]) -> Task:
        """Apply a patch to a task and refresh updated_at.

        Args:
            actor: Acting identity.
            task_id: Task to modify.
            patch: Any of ``title``, ``description``, ``status``, ``owner_id``.

        Returns:
            Copy of the updated task with owner_name resolved.

        Raises:
            NotFoundError: If the task, or a newly requested owner, does not exist.
            PermissionDeniedError: If the policy rejects the update.
            ValueError: If patch has unknown or immutable fields.
        """
        _validate_fields("task", patch, TASK_FIELDS)
        changes = dict(patch)
        if "status" in changes:
            changes["status"] = TaskStatus(changes["status"])
        with self._transaction(accounts_changed=False):
            index = self._task_index(task_id)
            task = self._tasks[index]
            check(actor, Operation.UPDATE_TASK, task, changes).raise_if_denied()
            if "owner_id" in changes:
                self._account_index(changes["owner_id"])
            updated = replace(task, **changes, updated_at=utc_now())
            self._tasks[index] = updated
            result = self._present(updated)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return result

    def delete_task(self, actor: Actor | None, task_id: TaskId) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If the task does not exist.
            PermissionDeniedError: If the actor neither is an admin nor owns it.
        """
        with self._transaction(accounts_changed=False):
            index = self._task_index(task_id)
            check(actor, Operation.DELETE_TASK, self._tasks[index]).raise_if_denied()
            del self._tasks[index]
        logger.debug("Task deleted id=%s", task_id)

    def toggle_status(self, actor: Actor | None, task_id: TaskId) -> Task:
        """Flip a task between completed and pending.

        An in_progress task becomes completed; toggling never returns a task
        to in_progress.

        Raises:
            NotFoundError: If the task does not exist.
            PermissionDeniedError: If the actor neither is an admin nor owns it.
        """
        with self._transaction(accounts_changed=False):
            index = self._task_index(task_id)
            task = self._tasks[index]
            check(actor, Operation.TOGGLE_TASK, task).raise_if_denied()
            updated = replace(task, status=task.status.toggled(), updated_at=utc_now())
            self._tasks[index] = updated
            result = self._present(updated)
        logger.debug("Task toggled id=%s %s->%s", task_id, task.status.value, updated.status.value)
        return result

    # ---- dashboard ----

    def dashboard(self, actor: Actor | None) -> DashboardStats:
        """Headline counts scoped to what actor may see.

        Raises:
            PermissionDeniedError: If nobody is logged in.
        """
        if actor is None:
            raise PermissionDeniedError(DenialReason.NOT_AUTHENTICATED)
        self._settle()
        with self._lock:
            return DashboardStats.compute(actor, self._accounts, self._tasks)
