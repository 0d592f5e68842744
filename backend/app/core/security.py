"""
Security utilities for authentication.

Provides password hashing (bcrypt) and opaque session token management.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.context import CryptContext

from app.core.config import settings

# Password hashing context using bcrypt with a fixed cost factor
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a login password against the stored bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a signup password. The salt is embedded in the result."""
    return pwd_context.hash(password)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_session_token() -> str:
    """Create a fresh random bearer token."""
    return secrets.token_urlsafe(32)


def session_expiry(issued_at: Optional[datetime] = None) -> datetime:
    """
    Compute when a session issued at `issued_at` stops being valid.

    Args:
        issued_at: Issue time, defaults to now

    Returns:
        Timezone-aware expiry timestamp
    """
    issued_at = issued_at or utcnow()
    return issued_at + timedelta(minutes=settings.SESSION_TTL_MINUTES)


def is_session_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """
    Check a session expiry timestamp.

    Naive timestamps (as returned by SQLite) are treated as UTC.
    A missing expiry counts as expired.
    """
    if expires_at is None:
        return True
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return (now or utcnow()) >= expires_at
