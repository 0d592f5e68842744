"""
Authentication API endpoints.

Handles signup, login and logout with opaque bearer session tokens.
Each account has at most one active session: login replaces it, logout
clears it.
"""

import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator

from app.api.deps import get_account_repository, get_current_account
from app.core.logging import get_logger
from app.core.security import (
    get_password_hash,
    new_session_token,
    session_expiry,
    verify_password,
)
from app.repositories import AccountRepository
from app.schemas import Account, UserRole

router = APIRouter()
logger = get_logger("auth", "AUTH")

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"


# ============== Pydantic Schemas ==============


class SignupRequest(BaseModel):
    """Schema for account registration."""

    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = UserRole.DEVELOPER.value
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        """Validate email format when present."""
        if not v:
            return v
        v = v.strip()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower()


class LoginRequest(BaseModel):
    email: str
    password: str


class SessionResponse(BaseModel):
    success: bool = True
    message: str
    sessionId: str
    userId: str
    role: UserRole
    firstName: Optional[str] = None
    lastName: Optional[str] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# ============== API Endpoints ==============


@router.post("/signup", response_model=SessionResponse, response_model_exclude_none=True)
async def signup(
    request: SignupRequest,
    accounts: AccountRepository = Depends(get_account_repository),
):
    """
    Register a new account and open its first session.

    The email uniqueness check and the insert happen as one storage
    operation, so two concurrent signups cannot both succeed.
    """
    if not all([request.email, request.password, request.firstName, request.lastName, request.role]):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields",
        )

    if request.role not in (UserRole.DEVELOPER.value, UserRole.RECRUITER.value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid role. Must be developer or recruiter",
        )

    token = new_session_token()
    account = Account(
        email=request.email,
        hashed_password=get_password_hash(request.password),
        role=UserRole(request.role),
        first_name=request.firstName,
        last_name=request.lastName,
        phone=request.phone,
        session_token=token,
        session_expires_at=session_expiry(),
    )

    if not accounts.insert_if_absent(account):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists",
        )

    logger.info("New %s account %s", account.role.value, account.id)

    return SessionResponse(
        message="Signup successful",
        sessionId=token,
        userId=account.id,
        role=account.role,
    )


@router.post("/login", response_model=SessionResponse)
async def login(
    request: LoginRequest,
    accounts: AccountRepository = Depends(get_account_repository),
):
    """
    Verify credentials and issue a new session token.

    Any previously issued token stops working. Unknown email and wrong
    password produce the same response.
    """
    invalid_credentials = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
    )

    account = accounts.get_by_email(request.email.strip().lower())
    if account is None:
        raise invalid_credentials

    if not verify_password(request.password, account.hashed_password):
        logger.info("Failed login for user %s", account.id)
        raise invalid_credentials

    account.session_token = new_session_token()
    account.session_expires_at = session_expiry()
    accounts.save(account)

    logger.info("User %s logged in", account.id)

    return SessionResponse(
        message="Login successful",
        sessionId=account.session_token,
        userId=account.id,
        role=account.role,
        firstName=account.first_name,
        lastName=account.last_name,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_account: Account = Depends(get_current_account),
    accounts: AccountRepository = Depends(get_account_repository),
):
    """Clear the caller's session token."""
    current_account.session_token = None
    current_account.session_expires_at = None
    accounts.save(current_account)

    logger.info("User %s logged out", current_account.id)

    return MessageResponse(message="Logout successful")
