"""
List Invite Codes Use Case

Shows a patient the codes they have issued.
"""

from typing import Optional

from src.libs.result import Error, Result, Return
from src.app.repositories.invite_code_repository import StoreError
from src.app.services.clock import Clock, utc_now
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.authentication import authenticate
from src.domain.timeutils import isoformat_utc

from .dtos import InviteCodeInfo, ListInviteCodesResponse


class ListInviteCodesUseCase:
    """
    Use case for listing the caller's own invite codes, newest first.

    `valid` is true only while the code is unused and unexpired.
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
        self, credential: Optional[str]
    ) -> Result[ListInviteCodesResponse]:
        auth = await authenticate(self.identity_provider, credential)
        if auth.is_err():
            return Return.err(auth.error)

        async with self.uow:
            try:
                invite_codes = await self.uow.invite_codes.list_by_patient(auth.value)
            except StoreError:
                return Return.err(
                    Error("STORE_ERROR", "Failed to load invite codes")
                )

            now = self.clock()
            return Return.ok(
                ListInviteCodesResponse(
                    invite_codes=[
                        InviteCodeInfo(
                            code=invite_code.code,
                            expires_at=isoformat_utc(invite_code.expires_at),
                            created_at=isoformat_utc(invite_code.created_at),
                            used=invite_code.used,
                            valid=invite_code.is_redeemable(now),
                        )
                        for invite_code in invite_codes
                    ]
                )
            )
