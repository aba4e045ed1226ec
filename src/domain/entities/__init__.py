"""
Care Team Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import RelationType

# Export all entities
from .invite_code import (
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    INVITE_CODE_PREFIX,
    INVITE_CODE_TTL,
    InviteCode,
)
from .care_relation import CareRelation
from .profile import Profile

__all__ = [
    # Enums
    "RelationType",
    # Constants
    "INVITE_CODE_ALPHABET",
    "INVITE_CODE_LENGTH",
    "INVITE_CODE_PREFIX",
    "INVITE_CODE_TTL",
    # Entities
    "InviteCode",
    "CareRelation",
    "Profile",
]
