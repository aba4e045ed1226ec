from typing import Optional
from uuid import UUID

from src.api.utils.jwt import verify_jwt
from src.app.services.identity_provider import IIdentityProvider


class JwtIdentityProvider(IIdentityProvider):
    """Identity provider backed by HS256 access tokens"""

    async def resolve_identity(self, credential: str) -> Optional[UUID]:
        payload = verify_jwt(credential)
        if payload is None:
            return None

        subject = payload.get("sub")
        if not subject:
            return None

        try:
            return UUID(subject)
        except (TypeError, ValueError):
            return None
