from .requests import UserProfileUpdate
from .responses import UserResponse

__all__ = ["UserProfileUpdate", "UserResponse"]
