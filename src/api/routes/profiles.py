from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.bearer import get_bearer_credential
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.profiles import GetUserProfileResponse, GetUserProfileUseCase
from src.depends import get_identity_provider, get_unit_of_work

router = APIRouter(prefix="/profiles", tags=["Profiles"])


class ProfileLookupRequest(BaseModel):
    """Profile lookup HTTP request payload"""

    user_id: Optional[str] = Field(None, description="User UUID to look up")


@router.post(
    "/lookup",
    status_code=status.HTTP_200_OK,
    response_model=GetUserProfileResponse,
)
async def lookup_profile(
    request: Optional[ProfileLookupRequest] = None,
    credential: Optional[str] = Depends(get_bearer_credential),
    uow: UnitOfWork = Depends(get_unit_of_work),
    identity_provider: IIdentityProvider = Depends(get_identity_provider),
):
    """
    Look Up User Profile

    Raises:
        - 400 Bad Request: Missing or malformed user_id
        - 401 Unauthorized: Missing or invalid bearer credential
        - 404 Not Found: PROFILE_NOT_FOUND
        - 500 Internal Server Error: STORE_ERROR
    """
    use_case = GetUserProfileUseCase(uow, identity_provider)
    request = request or ProfileLookupRequest()
    result = await use_case.execute(credential, request.user_id)

    if result.is_err():
        error = result.error
        if error.code in ("MISSING_CREDENTIAL", "UNAUTHORIZED"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "BAD_REQUEST":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "PROFILE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
