"""Configuration settings using Pydantic Settings.

Provides typed configuration for the entity store with environment variable
support.

Usage:
    from adminflow.config import StoreSettings

    # Load from environment variables (ADMINFLOW_*)
    settings = StoreSettings()

    # Or override with explicit values
    settings = StoreSettings(data_dir="/var/lib/adminflow", latency=0.5)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from adminflow.core.identity import WellKnownAccount


class StoreSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the entity store.

    Attributes:
        data_dir: Directory for JSON record files (None keeps data in memory).
        latency: Seconds each operation waits before settling.
        default_admin_id: Id of the account that is always an administrator.
        default_admin_name: Name used when the default admin is re-created.
        default_admin_email: Email used when the default admin is re-created.
        unknown_owner_name: Shown as owner_name when a task's owner is gone.

    Environment Variables:
        ADMINFLOW_DATA_DIR
        ADMINFLOW_LATENCY
        ADMINFLOW_DEFAULT_ADMIN_ID
        ADMINFLOW_DEFAULT_ADMIN_NAME
        ADMINFLOW_DEFAULT_ADMIN_EMAIL
        ADMINFLOW_UNKNOWN_OWNER_NAME
    """

    model_config = SettingsConfigDict(
        env_prefix="ADMINFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path | None = None
    latency: float = Field(default=0.0, ge=0.0)
    default_admin_id: str = WellKnownAccount.DEFAULT_ADMIN_ID
    default_admin_name: str = WellKnownAccount.DEFAULT_ADMIN_NAME
    default_admin_email: str = WellKnownAccount.DEFAULT_ADMIN_EMAIL
    unknown_owner_name: str = "Unknown"
