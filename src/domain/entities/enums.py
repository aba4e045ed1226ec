"""
Care Team Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class RelationType(str, Enum):
    """Kind of caregiver linked to a patient"""

    doctor = "doctor"
    nutritionist = "nutritionist"
    family = "family"
