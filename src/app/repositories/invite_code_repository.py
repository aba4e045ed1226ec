from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import InviteCode


class StoreError(Exception):
    """Raised by repositories when the backing store fails"""


class InviteCodeConflictError(StoreError):
    """Raised when an insert violates the unique constraint on code"""


class IInviteCodeRepository(ABC):
    """
    Invite code repository interface - application layer

    Implementations must enforce uniqueness of `code` at the storage layer
    and raise InviteCodeConflictError on a duplicate insert. The existence
    check alone does not protect against concurrent inserts.
    """

    @abstractmethod
    async def exists(self, code: str) -> bool:
        """Check whether any record (used, expired or not) has this code"""
        pass

    @abstractmethod
    async def get_redeemable_by_code(
        self, code: str, now: datetime
    ) -> Optional[InviteCode]:
        """Get an unused, unexpired invite code"""
        pass

    @abstractmethod
    async def list_by_patient(self, patient_id: UUID) -> List[InviteCode]:
        """Get all invite codes issued to a patient, newest first"""
        pass

    @abstractmethod
    async def create(self, invite_code: InviteCode) -> InviteCode:
        """Create a new invite code"""
        pass

    @abstractmethod
    async def mark_used(self, invite_code_id: UUID) -> bool:
        """Flip an unused code to used; False if it was already used"""
        pass
