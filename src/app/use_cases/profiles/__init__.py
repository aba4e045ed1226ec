"""
Profile Use Cases
"""

from .dtos import GetUserProfileResponse, ProfileInfo
from .get_user_profile_use_case import GetUserProfileUseCase

__all__ = [
    "GetUserProfileUseCase",
    "GetUserProfileResponse",
    "ProfileInfo",
]
