"""
Shared FastAPI dependencies: storage, external clients and the session guard.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import is_session_expired
from app.db.session import get_db
from app.repositories import (
    AccountRepository,
    InMemoryStore,
    ProfileRepository,
    SqlAccountRepository,
    SqlProfileRepository,
)
from app.schemas import Account
from app.services import GenerativeClient, OAuthClient

logger = get_logger("auth", "AUTH")

# Bearer token extractor; missing headers are handled below as 401
bearer_scheme = HTTPBearer(auto_error=False)

_memory_store: Optional[InMemoryStore] = None


def get_memory_store() -> InMemoryStore:
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemoryStore()
    return _memory_store


# ============== Storage ==============


def get_account_repository(db: Session = Depends(get_db)) -> AccountRepository:
    if settings.STORAGE_BACKEND == "memory":
        return get_memory_store().accounts
    return SqlAccountRepository(db)


def get_profile_repository(db: Session = Depends(get_db)) -> ProfileRepository:
    if settings.STORAGE_BACKEND == "memory":
        return get_memory_store().profiles
    return SqlProfileRepository(db)


# ============== External Clients ==============


def get_generative_client() -> GenerativeClient:
    return GenerativeClient()


def get_oauth_client() -> OAuthClient:
    return OAuthClient()


# ============== Session Guard ==============


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    accounts: AccountRepository = Depends(get_account_repository),
) -> Account:
    """
    Resolve the bearer token to its account.

    Raises HTTPException 401 if the token is missing, unknown or expired.
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or not credentials.credentials:
        raise unauthorized

    account = accounts.get_by_session_token(credentials.credentials)
    if account is None:
        raise unauthorized

    if is_session_expired(account.session_expires_at):
        logger.info("Expired session rejected for user %s", account.id)
        raise unauthorized

    return account
