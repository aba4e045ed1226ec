from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.bearer import get_bearer_credential
from src.app.services.clock import Clock
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.invite_code_generator import InviteCodeGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invite_codes import (
    GenerateInviteCodeResponse,
    GenerateInviteCodeUseCase,
    ListInviteCodesResponse,
    ListInviteCodesUseCase,
    RedeemInviteCodeResponse,
    RedeemInviteCodeUseCase,
)
from src.depends import (
    get_clock,
    get_identity_provider,
    get_invite_code_generator,
    get_unit_of_work,
)

router = APIRouter(prefix="/invite-codes", tags=["Invite Codes"])

UNAUTHENTICATED_CODES = ("MISSING_CREDENTIAL", "UNAUTHORIZED")


class RedeemInviteCodeRequest(BaseModel):
    """
    Redeem invite code HTTP request payload

    Fields are optional so that a missing value is reported by the use case
    with a specific message instead of a generic validation error.
    """

    code: Optional[str] = Field(None, description="Invite code, e.g. PAT-7K2M9Q")
    relation_type: Optional[str] = Field(
        None, description="doctor, nutritionist or family"
    )


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=GenerateInviteCodeResponse,
)
async def generate_invite_code(
    credential: Optional[str] = Depends(get_bearer_credential),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    code_generator: InviteCodeGenerator = Depends(get_invite_code_generator),
    clock: Clock = Depends(get_clock),
):
    """
    Generate Invite Code

    Issues a new PAT-XXXXXX code for the calling patient, valid for 30 days.
    Each call issues a new code.

    Raises:
        - 401 Unauthorized: Missing or invalid bearer credential
        - 500 Internal Server Error: CODE_SPACE_EXHAUSTED, STORE_ERROR
    """
    use_case = GenerateInviteCodeUseCase(uow, identity_provider, code_generator, clock)
    result = await use_case.execute(credential)

    if result.is_err():
        error = result.error
        if error.code in UNAUTHENTICATED_CODES:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=ListInviteCodesResponse,
)
async def list_invite_codes(
    credential: Optional[str] = Depends(get_bearer_credential),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    clock: Clock = Depends(get_clock),
):
    """
    List Invite Codes

    Returns the caller's invite codes, newest first.

    Raises:
        - 401 Unauthorized: Missing or invalid bearer credential
        - 500 Internal Server Error: STORE_ERROR
    """
    use_case = ListInviteCodesUseCase(uow, identity_provider, clock)
    result = await use_case.execute(credential)

    if result.is_err():
        error = result.error
        if error.code in UNAUTHENTICATED_CODES:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.post(
    "/redeem",
    status_code=status.HTTP_200_OK,
    response_model=RedeemInviteCodeResponse,
)
async def redeem_invite_code(
    request: Optional[RedeemInviteCodeRequest] = None,
    credential: Optional[str] = Depends(get_bearer_credential),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
    clock: Clock = Depends(get_clock),
):
    """
    Redeem Invite Code

    Links the caller, as caregiver, to the patient who issued the code.

    Raises:
        - 400 Bad Request: BAD_REQUEST, INVALID_RELATION_TYPE, SELF_CONNECTION,
                           ALREADY_CONNECTED
        - 401 Unauthorized: Missing or invalid bearer credential
        - 404 Not Found: INVALID_INVITE_CODE (unknown, used or expired)
        - 500 Internal Server Error: STORE_ERROR
    """
    use_case = RedeemInviteCodeUseCase(uow, identity_provider, clock)
    request = request or RedeemInviteCodeRequest()
    result = await use_case.execute(credential, request.code, request.relation_type)

    if result.is_err():
        error = result.error
        if error.code in UNAUTHENTICATED_CODES:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in (
            "BAD_REQUEST",
            "INVALID_RELATION_TYPE",
            "SELF_CONNECTION",
            "ALREADY_CONNECTED",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVALID_INVITE_CODE":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
