"""SubscriptionRepository.add integrity-error mapping, over a mocked session."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from agora.domain.entities import SubscriptionEntity
from agora.domain.enums import CommunityRole
from agora.domain.exceptions import SubscriptionConflictException
from agora.infrastructure.persistence.repositories import SubscriptionRepository
from agora.shared.utils.generators import generate_document_id


def _failing_session(message: str) -> MagicMock:
    session = MagicMock()
    session.flush = AsyncMock(
        side_effect=IntegrityError("INSERT INTO subscription ...", {}, Exception(message))
    )
    session.refresh = AsyncMock()
    return session


def _entity() -> SubscriptionEntity:
    return SubscriptionEntity(
        id=generate_document_id(),
        user_id=str(uuid.uuid4()),
        community_id=str(uuid.uuid4()),
        role=CommunityRole.MEMBER,
    )


async def test_unique_pair_violation_is_conflict() -> None:
    session = _failing_session(
        'duplicate key value violates unique constraint "uq_subscription_user_community"'
    )

    with pytest.raises(SubscriptionConflictException):
        await SubscriptionRepository(session).add(_entity())

    session.begin_nested.assert_called_once()


async def test_primary_key_collision_is_not_a_conflict() -> None:
    session = _failing_session(
        'duplicate key value violates unique constraint "subscription_pkey"'
    )

    with pytest.raises(IntegrityError):
        await SubscriptionRepository(session).add(_entity())
