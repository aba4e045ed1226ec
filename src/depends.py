from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.jwt_identity_provider import JwtIdentityProvider
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.clock import Clock, utc_now
from src.app.services.identity_provider import IIdentityProvider
from src.app.services.invite_code_generator import InviteCodeGenerator

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_identity_provider() -> IIdentityProvider:
    return JwtIdentityProvider()


def get_invite_code_generator() -> InviteCodeGenerator:
    # Fresh generator per request; no random state shared across requests
    return InviteCodeGenerator()


def get_clock() -> Clock:
    return utc_now
