"""
InviteCode Entity

Short shareable codes a patient hands to a caregiver.
"""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.timeutils import as_utc

INVITE_CODE_PREFIX = "PAT-"
INVITE_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
INVITE_CODE_LENGTH = 6
INVITE_CODE_TTL = timedelta(days=30)


class InviteCode(SQLModel, table=True):
    """
    InviteCode entity - a code a patient shares to add a caregiver.

    Business Rules:
    - Code format is PAT- followed by 6 characters from [A-Z0-9]
    - Code is unique across every record ever issued (used or expired)
    - Expires 30 days after creation
    - Redeemable only while used is false and now < expires_at
    - Only redemption mutates a code (used flip); codes are never deleted
    """

    __tablename__ = "invite_codes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    patient_id: UUID = Field(nullable=False, index=True)
    code: str = Field(unique=True, index=True, max_length=10)

    used: bool = Field(default=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))

    __table_args__ = (
        Index("idx_invite_code_patient_created", "patient_id", "created_at"),
    )

    def is_redeemable(self, now: datetime) -> bool:
        return not self.used and as_utc(now) < as_utc(self.expires_at)
