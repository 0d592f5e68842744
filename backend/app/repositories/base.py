"""
Storage interfaces.

Route handlers depend on these abstractions only. Uniqueness checks live
inside the storage layer (`insert_if_absent`) so a check and its write can
never be separated by another request.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.schemas import Account, Profile


class DuplicateKeyError(Exception):
    """A write would violate a uniqueness index (email, user id)."""

    def __init__(self, key: str):
        super().__init__(f"Duplicate value for unique key '{key}'")
        self.key = key


class AccountRepository(ABC):
    @abstractmethod
    def insert_if_absent(self, account: Account) -> bool:
        """Store the account unless its email is taken. Returns True if stored."""

    @abstractmethod
    def get(self, account_id: str) -> Optional[Account]:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Account]:
        ...

    @abstractmethod
    def get_by_session_token(self, token: str) -> Optional[Account]:
        ...

    @abstractmethod
    def save(self, account: Account) -> Account:
        """Overwrite an existing account (session changes)."""


class ProfileRepository(ABC):
    @abstractmethod
    def insert_if_absent(self, profile: Profile) -> bool:
        """Store the profile unless its email or user id already has one."""

    @abstractmethod
    def get(self, profile_id: str) -> Optional[Profile]:
        ...

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        ...

    @abstractmethod
    def save(self, profile: Profile) -> Profile:
        """
        Overwrite an existing profile.

        Raises:
            DuplicateKeyError: if the profile's email belongs to another profile
        """

    @abstractmethod
    def list_all(self) -> list[Profile]:
        """Every profile, in insertion order."""
