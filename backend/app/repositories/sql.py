"""
SQLAlchemy-backed storage.

Uniqueness is enforced by the database indexes on `users.email`,
`user_profiles.email` and `user_profiles.user_id`; an IntegrityError on
insert is reported as "already present".
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User, UserProfile
from app.repositories.base import AccountRepository, DuplicateKeyError, ProfileRepository
from app.schemas import Account, DeveloperInfo, Profile, RecruiterInfo

PROFILE_COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "date_of_birth",
    "gender",
    "country",
    "province",
    "district",
    "city",
    "title",
    "descriptions",
    "profile_pic",
    "cover_pic",
    "joined_date",
    "last_active",
)


# ============== Row Mapping ==============


def _account_from_row(row: User) -> Account:
    return Account(
        id=row.id,
        email=row.email,
        hashed_password=row.hashed_password,
        role=row.role,
        first_name=row.first_name,
        last_name=row.last_name,
        phone=row.phone,
        session_token=row.session_token,
        session_expires_at=row.session_expires_at,
        created_at=row.created_at,
    )


def _apply_account(row: User, account: Account) -> None:
    row.email = account.email
    row.hashed_password = account.hashed_password
    row.role = account.role.value
    row.first_name = account.first_name
    row.last_name = account.last_name
    row.phone = account.phone
    row.session_token = account.session_token
    row.session_expires_at = account.session_expires_at


def _profile_from_row(row: UserProfile) -> Profile:
    data = {column: getattr(row, column) for column in PROFILE_COLUMNS}
    return Profile(
        id=row.id,
        user_id=row.user_id,
        role=row.role,
        developer_info=DeveloperInfo.model_validate(row.developer_info) if row.developer_info else None,
        recruiter_info=RecruiterInfo.model_validate(row.recruiter_info) if row.recruiter_info else None,
        **data,
    )


def _apply_profile(row: UserProfile, profile: Profile) -> None:
    for column in PROFILE_COLUMNS:
        setattr(row, column, getattr(profile, column))
    row.role = profile.role.value
    row.developer_info = profile.developer_info.to_json() if profile.developer_info else None
    row.recruiter_info = profile.recruiter_info.to_json() if profile.recruiter_info else None


# ============== Repositories ==============


class SqlAccountRepository(AccountRepository):
    def __init__(self, db: Session):
        self.db = db

    def insert_if_absent(self, account: Account) -> bool:
        row = User(id=account.id, created_at=account.created_at)
        _apply_account(row, account)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return False
        return True

    def get(self, account_id: str) -> Optional[Account]:
        row = self.db.get(User, account_id)
        return _account_from_row(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        row = self.db.query(User).filter(User.email == email).first()
        return _account_from_row(row) if row else None

    def get_by_session_token(self, token: str) -> Optional[Account]:
        row = self.db.query(User).filter(User.session_token == token).first()
        return _account_from_row(row) if row else None

    def save(self, account: Account) -> Account:
        row = self.db.get(User, account.id)
        if row is None:
            raise KeyError(account.id)
        _apply_account(row, account)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateKeyError("email")
        return account


class SqlProfileRepository(ProfileRepository):
    def __init__(self, db: Session):
        self.db = db

    def insert_if_absent(self, profile: Profile) -> bool:
        row = UserProfile(id=profile.id, user_id=profile.user_id)
        _apply_profile(row, profile)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return False
        return True

    def get(self, profile_id: str) -> Optional[Profile]:
        row = self.db.query(UserProfile).filter(UserProfile.id == profile_id).first()
        return _profile_from_row(row) if row else None

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        row = self.db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        return _profile_from_row(row) if row else None

    def save(self, profile: Profile) -> Profile:
        row = self.db.query(UserProfile).filter(UserProfile.id == profile.id).first()
        if row is None:
            raise KeyError(profile.id)
        _apply_profile(row, profile)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateKeyError("email")
        return profile

    def list_all(self) -> list[Profile]:
        rows = self.db.query(UserProfile).order_by(UserProfile.seq).all()
        return [_profile_from_row(row) for row in rows]
