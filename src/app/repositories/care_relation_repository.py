from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import CareRelation


class ICareRelationRepository(ABC):
    """Care relation repository interface - application layer"""

    @abstractmethod
    async def get_by_caregiver_and_patient(
        self, caregiver_id: UUID, patient_id: UUID
    ) -> Optional[CareRelation]:
        """Get relation between a caregiver and a patient"""
        pass

    @abstractmethod
    async def create(self, care_relation: CareRelation) -> CareRelation:
        """Create a new care relation"""
        pass
