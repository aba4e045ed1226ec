from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.care_relation_repository import CareRelationRepository
from src.adapter.repositories.invite_code_repository import InviteCodeRepository
from src.adapter.repositories.profile_repository import ProfileRepository
from src.app.repositories.invite_code_repository import StoreError
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.invite_codes = InviteCodeRepository(self.session)
        self.care_relations = CareRelationRepository(self.session)
        self.profiles = ProfileRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(str(exc)) from exc

    async def rollback(self):
        await self.session.rollback()
