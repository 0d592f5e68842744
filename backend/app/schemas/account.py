import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from app.core.security import utcnow
from app.schemas.base import CamelModel


class UserRole(str, Enum):
    DEVELOPER = "developer"
    RECRUITER = "recruiter"


def new_id() -> str:
    return str(uuid.uuid4())


class Account(CamelModel):
    """Credential record. Never returned to clients as-is."""

    id: str = Field(default_factory=new_id)
    email: str
    hashed_password: str
    role: UserRole
    first_name: str
    last_name: str
    phone: Optional[str] = None
    session_token: Optional[str] = None
    session_expires_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
