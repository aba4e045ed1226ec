from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invite_code_repository import StoreError
from src.app.repositories.profile_repository import IProfileRepository
from src.domain.entities import Profile


class ProfileRepository(IProfileRepository):
    """Profile repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[Profile]:
        """Get profile by user ID"""
        stmt = select(Profile).where(Profile.id == user_id)
        try:
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
