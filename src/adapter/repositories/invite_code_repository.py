from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invite_code_repository import (
    IInviteCodeRepository,
    InviteCodeConflictError,
    StoreError,
)
from src.domain.entities import InviteCode


class InviteCodeRepository(IInviteCodeRepository):
    """Invite code repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, code: str) -> bool:
        """Check whether any record (used, expired or not) has this code"""
        stmt = select(InviteCode.id).where(InviteCode.code == code)
        try:
            result = await self.session.exec(stmt)
            return result.first() is not None
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    async def get_redeemable_by_code(
        self, code: str, now: datetime
    ) -> Optional[InviteCode]:
        """Get an unused, unexpired invite code"""
        stmt = select(InviteCode).where(
            InviteCode.code == code,
            InviteCode.used == False,  # noqa: E712
        )
        try:
            result = await self.session.exec(stmt)
            invite_code = result.one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

        # Expiry is compared in Python: SQLite stores naive timestamps
        if invite_code is None or not invite_code.is_redeemable(now):
            return None
        return invite_code

    async def list_by_patient(self, patient_id: UUID) -> List[InviteCode]:
        """Get all invite codes issued to a patient, newest first"""
        stmt = (
            select(InviteCode)
            .where(InviteCode.patient_id == patient_id)
            .order_by(col(InviteCode.created_at).desc())
        )
        try:
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    async def create(self, invite_code: InviteCode) -> InviteCode:
        """Create a new invite code"""
        self.session.add(invite_code)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # The failed flush leaves the transaction unusable
            await self.session.rollback()
            raise InviteCodeConflictError(invite_code.code) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(str(exc)) from exc
        await self.session.refresh(invite_code)
        return invite_code

    async def mark_used(self, invite_code_id: UUID) -> bool:
        """Flip an unused code to used; False if it was already used"""
        stmt = (
            update(InviteCode)
            .where(InviteCode.id == invite_code_id, InviteCode.used == False)  # noqa: E712
            .values(used=True)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(str(exc)) from exc
        return result.rowcount > 0
