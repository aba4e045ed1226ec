"""
Get User Profile Use Case

Looks up another user's public profile, e.g. a caregiver viewing a patient.
"""

import logging
from typing import Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.repositories.invite_code_repository import StoreError
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.authentication import authenticate

from .dtos import GetUserProfileResponse, ProfileInfo

logger = logging.getLogger(__name__)


class GetUserProfileUseCase:
    """
    Use case for fetching a profile by user id.

    Business Rules:
    - Caller must be authenticated
    - user_id is required and must be a UUID
    """

    def __init__(self, uow: UnitOfWork, identity_provider: IIdentityProvider):
        self.uow = uow
        self.identity_provider = identity_provider

    async def execute(
        self, credential: Optional[str], user_id: Optional[str]
    ) -> Result[GetUserProfileResponse]:
        auth = await authenticate(self.identity_provider, credential)
        if auth.is_err():
            return Return.err(auth.error)

        if not user_id:
            return Return.err(Error("BAD_REQUEST", "user_id is required"))

        try:
            profile_id = UUID(user_id)
        except ValueError:
            return Return.err(Error("BAD_REQUEST", "user_id must be a valid UUID"))

        async with self.uow:
            try:
                profile = await self.uow.profiles.get_by_id(profile_id)
            except StoreError as exc:
                logger.error(f"Error fetching user: {exc}")
                return Return.err(
                    Error("STORE_ERROR", "Failed to fetch user profile")
                )

            if profile is None:
                logger.info(f"User not found: {profile_id}")
                return Return.err(Error("PROFILE_NOT_FOUND", "User not found"))

            return Return.ok(
                GetUserProfileResponse(
                    profile=ProfileInfo(
                        id=str(profile.id),
                        email=profile.email,
                        full_name=profile.full_name,
                        role=profile.role,
                        specialty=profile.specialty,
                        clinic_name=profile.clinic_name,
                        relation_to_patient=profile.relation_to_patient,
                        diabetes_type=profile.diabetes_type,
                        age=profile.age,
                        weight=profile.weight,
                    )
                )
            )
