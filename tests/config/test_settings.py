"""Tests for StoreSettings and settings-driven store construction."""

import pytest
from pydantic import ValidationError

from adminflow import EntityStore, FileStorage, LocalStorage, StoreSettings, WellKnownAccount


def test_defaults_match_well_known_account():
    settings = StoreSettings(_env_file=None)

    assert settings.data_dir is None
    assert settings.latency == 0.0
    assert settings.default_admin_id == WellKnownAccount.DEFAULT_ADMIN_ID
    assert settings.default_admin_email == WellKnownAccount.DEFAULT_ADMIN_EMAIL
    assert settings.unknown_owner_name == "Unknown"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ADMINFLOW_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ADMINFLOW_LATENCY", "0.25")
    monkeypatch.setenv("ADMINFLOW_DEFAULT_ADMIN_ID", "root")

    settings = StoreSettings(_env_file=None)

    assert settings.data_dir == tmp_path
    assert settings.latency == 0.25
    assert settings.default_admin_id == "root"


def test_negative_latency_is_rejected():
    with pytest.raises(ValidationError):
        StoreSettings(latency=-1, _env_file=None)


def test_from_settings_picks_backend(tmp_path):
    memory_store = EntityStore.from_settings(StoreSettings(_env_file=None))
    file_store = EntityStore.from_settings(StoreSettings(data_dir=tmp_path, _env_file=None))

    assert isinstance(memory_store._adapter.storage, LocalStorage)
    assert isinstance(file_store._adapter.storage, FileStorage)
    assert (tmp_path / "adminflow_users.json").exists()


def test_custom_default_admin_is_seeded(tmp_path):
    settings = StoreSettings(
        data_dir=tmp_path,
        default_admin_id="root",
        default_admin_name="Root",
        default_admin_email="root@example.com",
        _env_file=None,
    )

    store = EntityStore.from_settings(settings)

    [account] = store.list_accounts()
    assert (account.id, account.name, account.email) == ("root", "Root", "root@example.com")
