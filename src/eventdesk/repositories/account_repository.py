"""
Account Repository

Data access layer for account records.
"""

import logging
from typing import Any, List, Optional

from eventdesk.integrations.persistence import PersistenceAdapter
from eventdesk.repositories.base import CollectionRepository, coerce_id
from eventdesk.schemas.account import Account

logger = logging.getLogger("ACCOUNT_REPOSITORY")


class AccountRepository(CollectionRepository[Account]):
    """Repository for account records; lookups on username and email ignore case."""

    def __init__(self, adapter: PersistenceAdapter, collection_name: str = "users"):
        super().__init__(Account, adapter, collection_name)

    def get_by_username(self, username: str) -> Optional[Account]:
        key = (username or "").strip().lower()
        return self.find(lambda account: account.username.lower() == key)

    def get_by_email(self, email: str) -> Optional[Account]:
        key = (email or "").strip().lower()
        return self.find(lambda account: account.email.lower() == key)

    def username_taken(self, username: str, exclude_id: Any = None) -> bool:
        existing = self.get_by_username(username)
        return existing is not None and existing.id != coerce_id(exclude_id)

    def email_taken(self, email: str, exclude_id: Any = None) -> bool:
        existing = self.get_by_email(email)
        return existing is not None and existing.id != coerce_id(exclude_id)

    def seed(self, accounts: List[Account]) -> None:
        """Store the initial accounts in a single write."""
        for account in accounts:
            self._records.append(account.model_copy(deep=True))
        self._next_id = self._compute_next_id()
        self.storage_initialized = True
        self.persist()
        logger.info(f"Seeded {len(accounts)} default accounts")
