"""
Profile Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel


class ProfileInfo(BaseModel):
    """Public profile details"""

    id: str
    email: str
    full_name: Optional[str] = None
    role: Optional[str] = None
    specialty: Optional[str] = None
    clinic_name: Optional[str] = None
    relation_to_patient: Optional[str] = None
    diabetes_type: Optional[str] = None
    age: Optional[int] = None
    weight: Optional[float] = None


class GetUserProfileResponse(BaseModel):
    """Response for get user profile use case"""

    profile: ProfileInfo
