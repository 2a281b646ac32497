"""Identity models.

Usage:
    account_id = new_id()
    sentinel = WellKnownAccount.DEFAULT_ADMIN_ID
"""

import uuid

AccountId = str
TaskId = str


def new_id() -> str:
    """Allocate an opaque, collision-free identifier for a new entity.

    Returns:
        A 32 character hex string.
    """
    return uuid.uuid4().hex


class WellKnownAccount:
    """Defaults for the default-administrator account.

    The values are only defaults: the store reads the effective sentinel from
    StoreSettings so deployments (and tests) can pick their own id.
    """

    DEFAULT_ADMIN_ID: AccountId = "1"
    DEFAULT_ADMIN_NAME = "Admin"
    DEFAULT_ADMIN_EMAIL = "admin@adminflow.com"
