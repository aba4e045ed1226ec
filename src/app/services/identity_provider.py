from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID


class IIdentityProvider(ABC):
    """Resolves bearer credentials to caller identities"""

    @abstractmethod
    async def resolve_identity(self, credential: str) -> Optional[UUID]:
        """Return the caller's user id, or None if the credential is invalid or expired"""
        pass
