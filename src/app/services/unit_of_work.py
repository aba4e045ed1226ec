from abc import ABC, abstractmethod

from src.app.repositories.care_relation_repository import ICareRelationRepository
from src.app.repositories.invite_code_repository import IInviteCodeRepository
from src.app.repositories.profile_repository import IProfileRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    invite_codes: IInviteCodeRepository
    care_relations: ICareRelationRepository
    profiles: IProfileRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
