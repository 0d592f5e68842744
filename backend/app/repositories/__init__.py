from app.repositories.base import AccountRepository, DuplicateKeyError, ProfileRepository
from app.repositories.memory import (
    InMemoryAccountRepository,
    InMemoryProfileRepository,
    InMemoryStore,
)
from app.repositories.sql import SqlAccountRepository, SqlProfileRepository

__all__ = [
    "AccountRepository",
    "DuplicateKeyError",
    "ProfileRepository",
    "InMemoryAccountRepository",
    "InMemoryProfileRepository",
    "InMemoryStore",
    "SqlAccountRepository",
    "SqlProfileRepository",
]
