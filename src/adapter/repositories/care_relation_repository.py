from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.care_relation_repository import ICareRelationRepository
from src.app.repositories.invite_code_repository import StoreError
from src.domain.entities import CareRelation


class CareRelationRepository(ICareRelationRepository):
    """Care relation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_caregiver_and_patient(
        self, caregiver_id: UUID, patient_id: UUID
    ) -> Optional[CareRelation]:
        """Get relation between a caregiver and a patient"""
        stmt = select(CareRelation).where(
            CareRelation.caregiver_id == caregiver_id,
            CareRelation.patient_id == patient_id,
        )
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    async def create(self, care_relation: CareRelation) -> CareRelation:
        """Create a new care relation"""
        self.session.add(care_relation)
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(str(exc)) from exc
        await self.session.refresh(care_relation)
        return care_relation
