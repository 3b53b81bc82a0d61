from user_api.models.base import Base
from user_api.models.user import User

__all__ = [
    "Base",
    "User",
]
