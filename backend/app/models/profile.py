from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class UserProfile(Base):
    """Profile row with role-specific payloads stored as JSON."""

    __tablename__ = "user_profiles"

    # Insertion order for list_all()
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String)
    date_of_birth = Column(String)
    gender = Column(String)
    country = Column(String)
    province = Column(String)
    district = Column(String)
    city = Column(String)
    title = Column(String)
    descriptions = Column(Text)
    profile_pic = Column(String)
    cover_pic = Column(String)
    role = Column(String, nullable=False)

    # Example: {"skills": ["Python", "React"], "reputationScore": 70, "level": "Intermediate"}
    developer_info = Column(JSON, nullable=True)
    recruiter_info = Column(JSON, nullable=True)

    joined_date = Column(DateTime(timezone=True))
    last_active = Column(DateTime(timezone=True))

    # Relationships
    user = relationship("User", back_populates="profile")
