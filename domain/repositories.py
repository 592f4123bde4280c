from __future__ import annotations

from typing import Optional, Protocol

from .models import Account


class AccountRepository(Protocol):
    """
    Abstraction over account persistence.

    Implementations are responsible for:
    - Mapping between database rows and the `Account` domain model.
    - Enforcing email uniqueness (the store is the source of truth).
    - Reporting timestamps as seconds since the Unix epoch.
    - Hiding any SQL / driver details from the application layer.
    """

    def create(self, name: str, email: str, password_hash: str) -> bool:
        """
        Insert a new account with a store-assigned ID and timestamps.

        Returns False if the insert fails for any reason, including a
        duplicate email.
        """

        ...

    def find_by_email(self, email: str) -> Optional[Account]:
        """Return the account with the given email, or None if not found."""

        ...

    def find_by_id(self, account_id: int) -> Optional[Account]:
        """Return the account with the given internal ID, or None if not found."""

        ...

    def exists(self, email: str) -> bool:
        ...
