"""
Profile Entity

Public profile details of an authenticated user.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel


class Profile(SQLModel, table=True):
    """
    Profile entity - keyed by the identity provider's user id.

    Caregivers look up patient profiles (and vice versa) through this table.
    """

    __tablename__ = "profiles"

    id: UUID = Field(primary_key=True)
    email: str = Field(max_length=255, index=True)

    full_name: Optional[str] = Field(default=None, max_length=255)
    role: Optional[str] = Field(default=None, max_length=32)  # patient, doctor, ...
    specialty: Optional[str] = Field(default=None, max_length=255)
    clinic_name: Optional[str] = Field(default=None, max_length=255)
    relation_to_patient: Optional[str] = Field(default=None, max_length=64)

    # Patient health details
    diabetes_type: Optional[str] = Field(default=None, max_length=32)
    age: Optional[int] = None
    weight: Optional[float] = None
