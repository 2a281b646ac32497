"""Invariant guard: keeps the default administrator in place.

The guard runs after every committed account mutation and when the store
starts. It never rejects anything; it repairs the account collection in
place and reports whether it had to.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from adminflow.config import StoreSettings
from adminflow.core.entity import Account, Role

logger = logging.getLogger(__name__)


class InvariantGuard:
    """Restores the admin invariants on an account collection.

    Checked invariants:
        - at least one account has role=admin
        - the default administrator exists and has role=admin

    Args:
        settings: Source of the default-admin id, name and email.
    """

    def __init__(self, settings: StoreSettings):
        self._admin_id = settings.default_admin_id
        self._admin_name = settings.default_admin_name
        self._admin_email = settings.default_admin_email

    @property
    def default_admin_id(self) -> str:
        return self._admin_id

    @property
    def default_admin_email(self) -> str:
        return self._admin_email

    def default_admin(self) -> Account:
        """Fresh default-administrator record."""
        return Account(
            id=self._admin_id,
            name=self._admin_name,
            email=self._admin_email,
            role=Role.ADMIN,
        )

    def is_satisfied(self, accounts: list[Account]) -> bool:
        """Check both admin invariants without touching the collection."""
        if not any(a.is_admin for a in accounts):
            return False
        return any(a.id == self._admin_id and a.is_admin for a in accounts)

    def repair(self, accounts: list[Account]) -> bool:
        """Repair accounts in place if an admin invariant is broken.

        A missing default admin is re-inserted at the head of the collection;
        a present one with the wrong role is replaced by a copy with
        role=admin.

        Args:
            accounts: The live account collection.

        Returns:
            True if the collection was changed and needs persisting.
        """
        if self.is_satisfied(accounts):
            return False
        for index, account in enumerate(accounts):
            if account.id == self._admin_id:
                accounts[index] = replace(account, role=Role.ADMIN)
                logger.warning(
                    "Default admin %s had role %s; restored admin role",
                    self._admin_id,
                    account.role.value,
                )
                return True
        accounts.insert(0, self.default_admin())
        logger.warning("Default admin %s was missing; re-inserted", self._admin_id)
        return True
