import re
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.repositories.invite_code_repository import (
    InviteCodeConflictError,
    StoreError,
)
from src.app.services.invite_code_generator import InviteCodeGenerator
from src.app.use_cases.invite_codes import MAX_ATTEMPTS, GenerateInviteCodeUseCase
from src.domain.entities import InviteCode
from tests.utils.code_generators import ScriptedCodeGenerator

CODE_PATTERN = re.compile(r"^PAT-[A-Z0-9]{6}$")


@pytest.mark.asyncio
async def test_successful_generation(mock_uow, mock_identity_provider, caller_id, fixed_clock):
    """A valid caller gets a PAT- code expiring 30 days later"""
    # Arrange
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, InviteCodeGenerator(), fixed_clock
    )

    # Act
    result = await use_case.execute("valid-token")

    # Assert
    assert result.is_ok()
    response = result.value
    assert CODE_PATTERN.match(response.code)
    assert response.expires_at == "2024-07-15T10:00:00Z"

    # Verify the persisted record
    mock_uow.invite_codes.create.assert_called_once()
    record = mock_uow.invite_codes.create.call_args.args[0]
    assert record.patient_id == caller_id
    assert record.code == response.code
    assert record.used is False
    assert record.created_at == fixed_clock()
    assert record.expires_at - record.created_at == timedelta(days=30)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_response_uses_persisted_values(mock_uow, mock_identity_provider, fixed_clock):
    """The store's normalized values are returned, not the pre-insert ones"""
    # Arrange: the store truncates the timestamp and drops tzinfo
    def normalize(invite_code):
        return InviteCode(
            id=invite_code.id,
            patient_id=invite_code.patient_id,
            code=invite_code.code,
            used=False,
            expires_at=datetime(2024, 7, 15, 10, 0),
            created_at=datetime(2024, 6, 15, 10, 0),
        )

    mock_uow.invite_codes.create.side_effect = normalize
    clock = lambda: datetime(2024, 6, 15, 10, 0, 0, 123456, tzinfo=UTC)  # noqa: E731
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, ScriptedCodeGenerator(["PAT-7K2M9Q"]), clock
    )

    # Act
    result = await use_case.execute("valid-token")

    # Assert
    assert result.is_ok()
    assert result.value.code == "PAT-7K2M9Q"
    assert result.value.expires_at == "2024-07-15T10:00:00Z"


@pytest.mark.asyncio
async def test_calls_are_not_idempotent(mock_uow, mock_identity_provider, fixed_clock):
    """Two calls from the same caller issue two different codes"""
    generator = ScriptedCodeGenerator(["PAT-AAAAAA", "PAT-BBBBBB"])
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, generator, fixed_clock
    )

    first = await use_case.execute("valid-token")
    second = await use_case.execute("valid-token")

    assert first.is_ok() and second.is_ok()
    assert first.value.code != second.value.code
    assert mock_uow.invite_codes.create.call_count == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("credential", [None, ""])
async def test_missing_credential(mock_uow, mock_identity_provider, credential):
    """A missing credential fails before identity resolution"""
    use_case = GenerateInviteCodeUseCase(mock_uow, mock_identity_provider)

    result = await use_case.execute(credential)

    assert result.is_err()
    assert result.error.code == "MISSING_CREDENTIAL"
    assert result.error.message == "Missing authorization header"
    mock_identity_provider.resolve_identity.assert_not_called()
    mock_uow.invite_codes.create.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_credential(mock_uow, mock_identity_provider):
    """An unresolvable credential fails without touching the store"""
    use_case = GenerateInviteCodeUseCase(mock_uow, mock_identity_provider)

    result = await use_case.execute("expired-token")

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"
    assert result.error.message == "Unauthorized"
    mock_uow.invite_codes.exists.assert_not_called()
    mock_uow.invite_codes.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_retries_after_collision(mock_uow, mock_identity_provider, fixed_clock):
    """Existing codes are skipped until a free candidate is found"""
    # Arrange: the first two candidates already exist
    mock_uow.invite_codes.exists.side_effect = [True, True, False]
    generator = ScriptedCodeGenerator(["PAT-AAAAAA", "PAT-BBBBBB", "PAT-CCCCCC"])
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, generator, fixed_clock
    )

    # Act
    result = await use_case.execute("valid-token")

    # Assert
    assert result.is_ok()
    assert result.value.code == "PAT-CCCCCC"
    assert generator.calls == 3
    mock_uow.invite_codes.create.assert_called_once()


@pytest.mark.asyncio
async def test_code_space_exhausted(mock_uow, mock_identity_provider, fixed_clock):
    """Ten consecutive collisions end the call with nothing persisted"""
    mock_uow.invite_codes.exists.return_value = True
    generator = ScriptedCodeGenerator(["PAT-AAAAAA"])
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, generator, fixed_clock
    )

    result = await use_case.execute("valid-token")

    assert result.is_err()
    assert result.error.code == "CODE_SPACE_EXHAUSTED"
    assert result.error.message == "Failed to generate unique code"
    assert generator.calls == MAX_ATTEMPTS == 10
    assert mock_uow.invite_codes.exists.call_count == 10
    mock_uow.invite_codes.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unique_constraint_rejection_is_retried(
    mock_uow, mock_identity_provider, fixed_clock
):
    """A concurrent insert of the same code is treated as a collision"""
    # Arrange: existence check passes, but another request wins the insert
    persisted = []

    async def create(invite_code):
        if invite_code.code == "PAT-RACE01":
            raise InviteCodeConflictError(invite_code.code)
        persisted.append(invite_code)
        return invite_code

    mock_uow.invite_codes.create = AsyncMock(side_effect=create)
    generator = ScriptedCodeGenerator(["PAT-RACE01", "PAT-FRESH1"])
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, generator, fixed_clock
    )

    # Act
    result = await use_case.execute("valid-token")

    # Assert
    assert result.is_ok()
    assert result.value.code == "PAT-FRESH1"
    assert [record.code for record in persisted] == ["PAT-FRESH1"]
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_unique_constraint_rejections_count_toward_limit(
    mock_uow, mock_identity_provider, fixed_clock
):
    mock_uow.invite_codes.create = AsyncMock(
        side_effect=InviteCodeConflictError("PAT-AAAAAA")
    )
    generator = ScriptedCodeGenerator(["PAT-AAAAAA"])
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, generator, fixed_clock
    )

    result = await use_case.execute("valid-token")

    assert result.is_err()
    assert result.error.code == "CODE_SPACE_EXHAUSTED"
    assert mock_uow.invite_codes.create.call_count == 10
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_store_error_on_insert(mock_uow, mock_identity_provider, fixed_clock):
    """An insert outage fails the call without retrying"""
    mock_uow.invite_codes.create = AsyncMock(side_effect=StoreError("connection refused"))
    generator = ScriptedCodeGenerator(["PAT-AAAAAA", "PAT-BBBBBB"])
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, generator, fixed_clock
    )

    result = await use_case.execute("valid-token")

    assert result.is_err()
    assert result.error.code == "STORE_ERROR"
    assert result.error.message == "Failed to create invite code"
    assert generator.calls == 1
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_store_error_on_commit(mock_uow, mock_identity_provider, fixed_clock):
    mock_uow.commit = AsyncMock(side_effect=StoreError("disk I/O error"))
    use_case = GenerateInviteCodeUseCase(
        mock_uow, mock_identity_provider, InviteCodeGenerator(), fixed_clock
    )

    result = await use_case.execute("valid-token")

    assert result.is_err()
    assert result.error.code == "STORE_ERROR"


@pytest.mark.asyncio
async def test_store_error_on_existence_check(mock_uow, mock_identity_provider):
    mock_uow.invite_codes.exists = AsyncMock(side_effect=StoreError("timeout"))
    use_case = GenerateInviteCodeUseCase(mock_uow, mock_identity_provider)

    result = await use_case.execute("valid-token")

    assert result.is_err()
    assert result.error.code == "STORE_ERROR"
    mock_uow.invite_codes.create.assert_not_called()


@pytest.mark.asyncio
async def test_codes_are_owned_by_resolved_caller(mock_uow, fixed_clock):
    """The patient id comes from the identity provider, never from the request"""
    patient_id = uuid4()
    provider = AsyncMock()
    provider.resolve_identity = AsyncMock(return_value=patient_id)
    use_case = GenerateInviteCodeUseCase(mock_uow, provider, clock=fixed_clock)

    result = await use_case.execute("any-token")

    assert result.is_ok()
    provider.resolve_identity.assert_called_once_with("any-token")
    record = mock_uow.invite_codes.create.call_args.args[0]
    assert record.patient_id == patient_id
