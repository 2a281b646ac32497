"""Session holder: who is logged in.

Usage:
    session = SessionHolder(store, storage)
    actor = session.login("ana@example.com", "any password")
    store.create_task(session.current, {...})
    session.logout()

The session is persisted apart from the collections, as the actor projection
plus a display token. The store never reads it; callers pass
``session.current`` explicitly.
"""

from __future__ import annotations

import json
import logging

from adminflow.core.entity import Actor
from adminflow.errors import StorageError
from adminflow.storage import SESSION_RECORD, TOKEN_RECORD, LocalStorage, Storage
from adminflow.store import EntityStore

logger = logging.getLogger(__name__)


def session_token(actor: Actor) -> str:
    """Display token for a logged-in actor. Not a credential."""
    return f"fake-token-{actor.id}"


class SessionHolder:
    """Holds the current actor and persists it across restarts.

    Args:
        store: Store used to resolve or provision accounts on login.
        storage: Backend for the session records (default: in-memory).
    """

    def __init__(self, store: EntityStore, storage: Storage | None = None):
        self._store = store
        self._storage = storage or LocalStorage()
        self._actor = self._restore()

    def _restore(self) -> Actor | None:
        raw = self._storage.read(SESSION_RECORD)
        if raw is None:
            return None
        try:
            return Actor.from_dict(json.loads(raw.decode("utf-8")))
        except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise StorageError(f"record {SESSION_RECORD!r} holds a malformed session") from e

    @property
    def current(self) -> Actor | None:
        """The logged-in actor, or None."""
        return self._actor

    @property
    def is_authenticated(self) -> bool:
        return self._actor is not None

    @property
    def token(self) -> str | None:
        raw = self._storage.read(TOKEN_RECORD)
        return raw.decode("utf-8") if raw is not None else None

    def login(self, email: str, password: str) -> Actor:
        """Log in by email. The password is accepted without verification.

        Args:
            email: Login email; unknown emails provision a user account.
            password: Ignored.

        Returns:
            The new current actor.
        """
        account = self._store.login(email)
        actor = Actor.from_account(account)
        self._storage.write(
            {
                SESSION_RECORD: json.dumps(actor.to_dict()).encode("utf-8"),
                TOKEN_RECORD: session_token(actor).encode("utf-8"),
            }
        )
        self._actor = actor
        logger.info("Session started id=%s role=%s", actor.id, actor.role.value)
        return actor

    def logout(self) -> None:
        """Clear the current actor and its persisted records."""
        self._storage.delete(SESSION_RECORD)
        self._storage.delete(TOKEN_RECORD)
        if self._actor is not None:
            logger.info("Session ended id=%s", self._actor.id)
        self._actor = None
