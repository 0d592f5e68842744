"""
In-process storage.

Dicts keyed by id with secondary indexes for email, session token and user
id. A single lock per repository makes every check-then-write atomic.
"""

import threading
from typing import Optional

from app.repositories.base import AccountRepository, DuplicateKeyError, ProfileRepository
from app.schemas import Account, Profile


class InMemoryAccountRepository(AccountRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._accounts: dict[str, Account] = {}
        self._by_email: dict[str, str] = {}
        self._by_token: dict[str, str] = {}

    def insert_if_absent(self, account: Account) -> bool:
        with self._lock:
            if account.email in self._by_email:
                return False
            self._store(account)
            return True

    def get(self, account_id: str) -> Optional[Account]:
        with self._lock:
            account = self._accounts.get(account_id)
            return account.model_copy(deep=True) if account else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with self._lock:
            account_id = self._by_email.get(email)
            return self.get(account_id) if account_id else None

    def get_by_session_token(self, token: str) -> Optional[Account]:
        with self._lock:
            account_id = self._by_token.get(token)
            return self.get(account_id) if account_id else None

    def save(self, account: Account) -> Account:
        with self._lock:
            if account.id not in self._accounts:
                raise KeyError(account.id)
            owner = self._by_email.get(account.email)
            if owner is not None and owner != account.id:
                raise DuplicateKeyError("email")
            previous = self._accounts[account.id]
            self._by_email.pop(previous.email, None)
            if previous.session_token:
                self._by_token.pop(previous.session_token, None)
            self._store(account)
            return account

    def _store(self, account: Account) -> None:
        stored = account.model_copy(deep=True)
        self._accounts[stored.id] = stored
        self._by_email[stored.email] = stored.id
        if stored.session_token:
            self._by_token[stored.session_token] = stored.id


class InMemoryProfileRepository(ProfileRepository):
    def __init__(self):
        self._lock = threading.RLock()
        # dicts preserve insertion order
        self._profiles: dict[str, Profile] = {}
        self._by_email: dict[str, str] = {}
        self._by_user: dict[str, str] = {}

    def insert_if_absent(self, profile: Profile) -> bool:
        with self._lock:
            if profile.email in self._by_email or profile.user_id in self._by_user:
                return False
            self._store(profile)
            return True

    def get(self, profile_id: str) -> Optional[Profile]:
        with self._lock:
            profile = self._profiles.get(profile_id)
            return profile.model_copy(deep=True) if profile else None

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        with self._lock:
            profile_id = self._by_user.get(user_id)
            return self.get(profile_id) if profile_id else None

    def save(self, profile: Profile) -> Profile:
        with self._lock:
            if profile.id not in self._profiles:
                raise KeyError(profile.id)
            owner = self._by_email.get(profile.email)
            if owner is not None and owner != profile.id:
                raise DuplicateKeyError("email")
            previous = self._profiles[profile.id]
            self._by_email.pop(previous.email, None)
            self._store(profile)
            return profile

    def list_all(self) -> list[Profile]:
        with self._lock:
            return [profile.model_copy(deep=True) for profile in self._profiles.values()]

    def _store(self, profile: Profile) -> None:
        stored = profile.model_copy(deep=True)
        self._profiles[stored.id] = stored
        self._by_email[stored.email] = stored.id
        self._by_user[stored.user_id] = stored.id


class InMemoryStore:
    """Both repositories, shared by every request in the process."""

    def __init__(self):
        self.accounts = InMemoryAccountRepository()
        self.profiles = InMemoryProfileRepository()
