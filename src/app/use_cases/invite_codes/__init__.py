"""
Invite Code Use Cases

Issuing, listing and redeeming care team invite codes.
"""

from .dtos import (
    CareRelationInfo,
    GenerateInviteCodeResponse,
    InviteCodeInfo,
    ListInviteCodesResponse,
    RedeemInviteCodeResponse,
)
from .generate_invite_code_use_case import MAX_ATTEMPTS, GenerateInviteCodeUseCase
from .list_invite_codes_use_case import ListInviteCodesUseCase
from .redeem_invite_code_use_case import RedeemInviteCodeUseCase

__all__ = [
    "GenerateInviteCodeUseCase",
    "ListInviteCodesUseCase",
    "RedeemInviteCodeUseCase",
    "MAX_ATTEMPTS",
    "GenerateInviteCodeResponse",
    "InviteCodeInfo",
    "ListInviteCodesResponse",
    "CareRelationInfo",
    "RedeemInviteCodeResponse",
]
