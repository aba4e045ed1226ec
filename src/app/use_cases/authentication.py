"""
Caller Authentication

Shared credential check used by every use case that acts on behalf of
a caller.
"""

import logging
from typing import Optional
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.identity_provider import IIdentityProvider

logger = logging.getLogger(__name__)


async def authenticate(
    identity_provider: IIdentityProvider, credential: Optional[str]
) -> Result[UUID]:
    """
    Resolve a bearer credential to the caller's user id.

    Returns:
        Result with the caller id, or MISSING_CREDENTIAL / UNAUTHORIZED
    """
    if not credential:
        logger.warning("Missing authorization credential")
        return Return.err(
            Error("MISSING_CREDENTIAL", "Missing authorization header")
        )

    caller_id = await identity_provider.resolve_identity(credential)
    if caller_id is None:
        logger.warning("Authentication failed: credential did not resolve")
        return Return.err(Error("UNAUTHORIZED", "Unauthorized"))

    return Return.ok(caller_id)
