"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from adminflow import (
    Account,
    Actor,
    EntityStore,
    LocalStorage,
    PersistenceAdapter,
    Role,
    StoreSettings,
)

DEFAULT_ADMIN_ID = "admin-1"
USER_ID = "user-2"


@pytest.fixture
def settings():
    """Settings with a test default-admin id and no latency."""
    return StoreSettings(default_admin_id=DEFAULT_ADMIN_ID, latency=0.0, _env_file=None)


@pytest.fixture
def backend():
    """Fresh in-memory backend."""
    return LocalStorage()


@pytest.fixture
def adapter(backend):
    return PersistenceAdapter(backend)


@pytest.fixture
def seeded_adapter(adapter):
    """Backend holding the default admin (admin-1) and one user (user-2)."""
    adapter.save(
        [
            Account(id=DEFAULT_ADMIN_ID, name="Admin", email="admin@adminflow.com", role=Role.ADMIN),
            Account(id=USER_ID, name="Joao Silva", email="joao@example.com", role=Role.USER),
        ],
        [],
    )
    return adapter


@pytest.fixture
def store(seeded_adapter, settings):
    """Store over the seeded backend."""
    return EntityStore(seeded_adapter, settings)


@pytest.fixture
def admin(store):
    return Actor.from_account(store.get_account(DEFAULT_ADMIN_ID))


@pytest.fixture
def user(store):
    return Actor.from_account(store.get_account(USER_ID))
