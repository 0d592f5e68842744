from app.models.user import User
from app.models.profile import UserProfile

__all__ = ["User", "UserProfile"]
