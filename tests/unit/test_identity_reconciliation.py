"""Facade call policy and owner identity reconciliation."""

import asyncio
import uuid
from unittest.mock import AsyncMock

import pytest

from agora.application.services.identity_reconciliation import (
    NOT_OWNER,
    call_facade,
    resolve_ownership_with_identity_fallback,
)
from agora.domain.exceptions import FacadeCallException, ResourceNotFoundException

COMMUNITY = str(uuid.uuid4())
USER = str(uuid.uuid4())
PROFILE = str(uuid.uuid4())


async def _returns(value):
    return value


async def _raises(exc: BaseException):
    raise exc


async def test_call_facade_returns_value() -> None:
    assert await call_facade(_returns(42), facade="users", operation="exists") == 42


async def test_call_facade_passes_domain_errors_through() -> None:
    with pytest.raises(ResourceNotFoundException):
        await call_facade(
            _raises(ResourceNotFoundException("community", COMMUNITY)),
            facade="communities",
            operation="is_private",
        )


async def test_call_facade_wraps_infrastructure_errors() -> None:
    with pytest.raises(FacadeCallException) as exc_info:
        await call_facade(
            _raises(TimeoutError()), facade="communities", operation="owner_id"
        )

    assert exc_info.value.details == {
        "facade": "communities",
        "operation": "owner_id",
        "reason": "TimeoutError",
    }


async def test_call_facade_does_not_intercept_cancellation() -> None:
    with pytest.raises(asyncio.CancelledError):
        await call_facade(
            _raises(asyncio.CancelledError()), facade="users", operation="exists"
        )


def _facades(recorded_owner: str, profile_id: str | None = PROFILE):
    communities = AsyncMock()
    communities.is_owner.side_effect = lambda cid, candidate: candidate == recorded_owner
    users = AsyncMock()
    users.profile_id_of.return_value = profile_id
    return communities, users


async def test_owner_matched_by_user_id_skips_profile_lookup() -> None:
    communities, users = _facades(USER)

    resolution = await resolve_ownership_with_identity_fallback(
        communities, users, COMMUNITY, USER
    )

    assert resolution.is_owner
    assert resolution.matched_via == "user_id"
    users.profile_id_of.assert_not_awaited()


async def test_owner_matched_by_profile_id() -> None:
    communities, users = _facades(PROFILE)

    resolution = await resolve_ownership_with_identity_fallback(
        communities, users, COMMUNITY, USER
    )

    assert resolution.is_owner
    assert resolution.via_profile_id
    assert communities.is_owner.await_count == 2


async def test_unknown_profile_is_not_owner() -> None:
    communities, users = _facades(PROFILE, profile_id=None)

    resolution = await resolve_ownership_with_identity_fallback(
        communities, users, COMMUNITY, USER
    )

    assert resolution == NOT_OWNER
    assert communities.is_owner.await_count == 1


async def test_identical_profile_id_not_checked_twice() -> None:
    communities, users = _facades(str(uuid.uuid4()), profile_id=USER)

    resolution = await resolve_ownership_with_identity_fallback(
        communities, users, COMMUNITY, USER
    )

    assert not resolution.is_owner
    assert communities.is_owner.await_count == 1


async def test_profile_lookup_failure_is_facade_error() -> None:
    communities, users = _facades(PROFILE)
    users.profile_id_of.side_effect = ConnectionError("users db down")

    with pytest.raises(FacadeCallException) as exc_info:
        await resolve_ownership_with_identity_fallback(
            communities, users, COMMUNITY, USER
        )

    assert exc_info.value.details["operation"] == "profile_id_of"
