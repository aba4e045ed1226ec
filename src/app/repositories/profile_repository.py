from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Profile


class IProfileRepository(ABC):
    """Profile repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[Profile]:
        """Get profile by user ID"""
        pass
