"""
CareRelation Entity

Links a caregiver to a patient.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import RelationType


class CareRelation(SQLModel, table=True):
    """
    CareRelation entity - created when a caregiver redeems an invite code.

    Business Rules:
    - (caregiver_id, patient_id) must be unique
    - A patient cannot be their own caregiver
    """

    __tablename__ = "care_relations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    caregiver_id: UUID = Field(nullable=False, index=True)
    patient_id: UUID = Field(nullable=False, index=True)

    relation_type: RelationType = Field(nullable=False)

    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))

    __table_args__ = (
        Index("idx_care_relation_caregiver_patient", "caregiver_id", "patient_id", unique=True),
    )
