"""
Redeem Invite Code Use Case

Links a caregiver to a patient using the patient's invite code.
"""

import logging
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.repositories.invite_code_repository import StoreError
from src.app.services.clock import Clock, utc_now
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.authentication import authenticate
from src.domain.entities import CareRelation, RelationType
from src.domain.timeutils import isoformat_utc

from .dtos import CareRelationInfo, RedeemInviteCodeResponse

logger = logging.getLogger(__name__)


class RedeemInviteCodeUseCase:
    """
    Use case for redeeming an invite code.

    Business Rules:
    - Caller becomes the caregiver; the code's owner is the patient
    - relation_type must be doctor, nutritionist or family
    - Code must be unused and unexpired
    - A patient cannot redeem their own code
    - A caregiver is linked to a given patient at most once
    - Relation creation and marking the code used commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        identity_provider: IIdentityProvider,
        clock: Clock = utc_now,
    ):
        self.uow = uow
        self.identity_provider = identity_provider
        self.clock = clock

    async def execute(
        self,
        credential: Optional[str],
        code: Optional[str],
        relation_type: Optional[str],
    ) -> Result[RedeemInviteCodeResponse]:
        """
        Execute redeem invite code use case.

        Args:
            credential: Bearer credential of the caregiver
            code: Invite code shared by the patient
            relation_type: doctor, nutritionist or family

        Returns:
            Result with RedeemInviteCodeResponse DTO, or Error
        """
        auth = await authenticate(self.identity_provider, credential)
        if auth.is_err():
            return Return.err(auth.error)
        caregiver_id = auth.value

        if not code or not relation_type:
            return Return.err(Error("BAD_REQUEST", "Missing code or relation_type"))

        try:
            relation = RelationType(relation_type)
        except ValueError:
            return Return.err(
                Error("INVALID_RELATION_TYPE", "Invalid relation_type")
            )

        async with self.uow:
            try:
                now = self.clock()
                invite_code = await self.uow.invite_codes.get_redeemable_by_code(
                    code.strip().upper(), now
                )
                if invite_code is None:
                    return Return.err(
                        Error("INVALID_INVITE_CODE", "Invalid or expired invite code")
                    )

                if invite_code.patient_id == caregiver_id:
                    return Return.err(
                        Error("SELF_CONNECTION", "Cannot connect to yourself")
                    )

                existing = await self.uow.care_relations.get_by_caregiver_and_patient(
                    caregiver_id, invite_code.patient_id
                )
                if existing:
                    return Return.err(
                        Error(
                            "ALREADY_CONNECTED",
                            "You are already connected to this patient",
                        )
                    )

                # Conditional update: only one concurrent redemption can claim the code
                claimed = await self.uow.invite_codes.mark_used(invite_code.id)
                if not claimed:
                    await self.uow.rollback()
                    return Return.err(
                        Error("INVALID_INVITE_CODE", "Invalid or expired invite code")
                    )

                care_relation = await self.uow.care_relations.create(
                    CareRelation(
                        caregiver_id=caregiver_id,
                        patient_id=invite_code.patient_id,
                        relation_type=relation,
                        created_at=now,
                    )
                )

                await self.uow.commit()
            except StoreError as exc:
                logger.error(f"Error creating care relationship: {exc}")
                return Return.err(
                    Error("STORE_ERROR", "Failed to create care relationship")
                )

            logger.info(
                f"Care relationship created: caregiver {caregiver_id} -> patient {care_relation.patient_id}"
            )

            return Return.ok(
                RedeemInviteCodeResponse(
                    success=True,
                    care_relation=CareRelationInfo(
                        id=str(care_relation.id),
                        caregiver_id=str(care_relation.caregiver_id),
                        patient_id=str(care_relation.patient_id),
                        relation_type=RelationType(care_relation.relation_type).value,
                        created_at=isoformat_utc(care_relation.created_at),
                    ),
                )
            )
