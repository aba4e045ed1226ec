from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

FIXED_NOW = datetime(2024, 6, 15, 10, 0, tzinfo=UTC)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.invite_codes = MagicMock()
    uow.invite_codes.exists = AsyncMock(return_value=False)
    uow.invite_codes.get_redeemable_by_code = AsyncMock()
    uow.invite_codes.list_by_patient = AsyncMock(return_value=[])
    uow.invite_codes.create = AsyncMock(side_effect=lambda invite_code: invite_code)
    uow.invite_codes.mark_used = AsyncMock(return_value=True)

    uow.care_relations = MagicMock()
    uow.care_relations.get_by_caregiver_and_patient = AsyncMock(return_value=None)
    uow.care_relations.create = AsyncMock(side_effect=lambda relation: relation)

    uow.profiles = MagicMock()
    uow.profiles.get_by_id = AsyncMock()

    return uow


@pytest.fixture
def caller_id():
    return uuid4()


@pytest.fixture
def mock_identity_provider(caller_id):
    """Identity provider that accepts "valid-token" only"""
    provider = MagicMock()

    async def resolve_identity(credential):
        return caller_id if credential == "valid-token" else None

    provider.resolve_identity = AsyncMock(side_effect=resolve_identity)
    return provider


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
