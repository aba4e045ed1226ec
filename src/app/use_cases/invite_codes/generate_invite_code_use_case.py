"""
Generate Invite Code Use Case

Issues a shareable code a patient hands to a caregiver.
"""

import logging
from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.repositories.invite_code_repository import (
    InviteCodeConflictError,
    StoreError,
)
from src.app.services.clock import Clock, utc_now
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.invite_code_generator import InviteCodeGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.authentication import authenticate
from src.domain.entities import INVITE_CODE_TTL, InviteCode
from src.domain.timeutils import isoformat_utc

from .dtos import GenerateInviteCodeResponse

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 10


class GenerateInviteCodeUseCase:
    """
    Use case for issuing a new invite code.

    Business Rules:
    - Caller must present a credential that resolves to an identity
    - Code is PAT- plus 6 characters from [A-Z0-9]
    - Code must not match any existing record, used or expired
    - At most 10 candidates are tried; a unique-constraint rejection on
      insert counts as a collision
    - Code expires 30 days after creation
    - Every call issues a new code; earlier codes stay valid
    """

    def __init__(
        self,
        uow: UnitOfWork,
        identity_provider: IIdentityProvider,
        code_generator: Optional[InviteCodeGenerator] = None,
        clock: Clock = utc_now,
    ):
        self.uow = uow
        self.identity_provider = identity_provider
        self.code_generator = code_generator or InviteCodeGenerator()
        self.clock = clock

    async def execute(
        self, credential: Optional[str]
    ) -> Result[GenerateInviteCodeResponse]:
        """
        Execute generate invite code use case.

        Args:
            credential: Bearer credential from the Authorization header

        Returns:
            Result with GenerateInviteCodeResponse DTO, or Error
        """
        auth = await authenticate(self.identity_provider, credential)
        if auth.is_err():
            return Return.err(auth.error)
        patient_id = auth.value

        async with self.uow:
            for attempt in range(1, MAX_ATTEMPTS + 1):
                code = self.code_generator.generate()

                try:
                    if await self.uow.invite_codes.exists(code):
                        logger.info(f"Invite code collision on attempt {attempt}")
                        continue

                    now = self.clock()
                    invite_code = await self.uow.invite_codes.create(
                        InviteCode(
                            patient_id=patient_id,
                            code=code,
                            expires_at=now + INVITE_CODE_TTL,
                            created_at=now,
                            used=False,
                        )
                    )
                    await self.uow.commit()
                except InviteCodeConflictError:
                    # Another request inserted the same code after our check
                    logger.info(
                        f"Invite code rejected by unique constraint on attempt {attempt}"
                    )
                    continue
                except StoreError as exc:
                    logger.error(f"Error creating invite code: {exc}")
                    return Return.err(
                        Error("STORE_ERROR", "Failed to create invite code")
                    )

                logger.info(f"Invite code created for patient {patient_id}")

                # Persisted values are authoritative
                return Return.ok(
                    GenerateInviteCodeResponse(
                        code=invite_code.code,
                        expires_at=isoformat_utc(invite_code.expires_at),
                    )
                )

        logger.error(
            f"Failed to generate unique code after {MAX_ATTEMPTS} attempts"
        )
        return Return.err(
            Error("CODE_SPACE_EXHAUSTED", "Failed to generate unique code")
        )
