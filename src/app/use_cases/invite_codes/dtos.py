"""
Invite Code Use Case DTOs (Data Transfer Objects)

All Response classes for the invite code domain.
"""

from typing import List

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class GenerateInviteCodeResponse(BaseModel):
    """Response for generate invite code use case"""

    code: str
    expires_at: str


class InviteCodeInfo(BaseModel):
    """Invite code as listed to its patient"""

    code: str
    expires_at: str
    created_at: str
    used: bool
    valid: bool


class ListInviteCodesResponse(BaseModel):
    """Response for list invite codes use case"""

    invite_codes: List[InviteCodeInfo]


class CareRelationInfo(BaseModel):
    """Care relation created by a redemption"""

    id: str
    caregiver_id: str
    patient_id: str
    relation_type: str
    created_at: str


class RedeemInviteCodeResponse(BaseModel):
    """Response for redeem invite code use case"""

    success: bool
    care_relation: CareRelationInfo
