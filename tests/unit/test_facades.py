"""Read-only facades over the in-memory repositories."""

import uuid

import pytest

from agora.core.container import Container
from agora.domain.entities import CommunityEntity
from agora.domain.enums import CommunityRole
from agora.domain.exceptions import ResourceNotFoundException, ValidationException
from agora.domain.value_objects import CommunityName, Description

DESCRIPTION = "A place to talk about chess openings"


async def _community(container: Container, owner_id: str, is_private: bool = False) -> str:
    outcome = await container.communities.create_community(
        owner_id, "Chess Club", DESCRIPTION, is_private=is_private
    )
    return outcome.community.id


async def test_communities_facade_owner_id_and_privacy(
    container: Container, register_user
) -> None:
    owner = await register_user()
    community_id = await _community(container, owner.user_id, is_private=True)
    facade = container.communities_facade

    assert await facade.exists(community_id)
    assert await facade.owner_id(community_id) == owner.user_id
    assert await facade.is_private(community_id)
    assert await facade.is_owner(community_id, owner.user_id)
    assert not await facade.is_owner(community_id, owner.profile_id)


async def test_communities_facade_owner_id_returns_recorded_profile_id(
    container: Container, register_user
) -> None:
    """No reconciliation at the facade: the stored identity comes back as is."""
    owner = await register_user()
    community_id = str(uuid.uuid4())
    await container.communities.community_repo.add(
        CommunityEntity(
            id=community_id,
            owner_id=owner.profile_id,
            name=CommunityName("Legacy Club"),
            description=Description(DESCRIPTION),
        )
    )

    assert await container.communities_facade.owner_id(community_id) == owner.profile_id
    assert not await container.communities_facade.is_owner(community_id, owner.user_id)


async def test_communities_facade_missing_community(container: Container) -> None:
    missing = str(uuid.uuid4())
    facade = container.communities_facade

    assert not await facade.exists(missing)
    with pytest.raises(ResourceNotFoundException):
        await facade.owner_id(missing)
    with pytest.raises(ResourceNotFoundException):
        await facade.is_private(missing)
    with pytest.raises(ValidationException):
        await facade.owner_id("not-a-uuid")


async def test_subscriptions_facade_is_subscribed_and_role_of(
    container: Container, register_user
) -> None:
    owner = await register_user()
    member = await register_user()
    outsider = await register_user()
    community_id = await _community(container, owner.user_id)
    await container.subscriptions.subscribe(member.user_id, member.user_id, community_id)
    facade = container.subscriptions_facade

    assert await facade.is_subscribed(member.user_id, community_id)
    assert await facade.is_subscribed(owner.user_id, community_id)
    assert not await facade.is_subscribed(outsider.user_id, community_id)
    assert await facade.role_of(member.user_id, community_id) is CommunityRole.MEMBER
    assert await facade.role_of(owner.user_id, community_id) is CommunityRole.OWNER
    assert await facade.role_of(outsider.user_id, community_id) is None
    assert await facade.community_ids_of(member.user_id) == [community_id]


async def test_users_facade(container: Container, register_user) -> None:
    user = await register_user()
    facade = container.users_facade

    assert await facade.exists(user.user_id)
    assert not await facade.exists(user.profile_id)
    assert await facade.profile_id_of(user.user_id) == user.profile_id
    assert await facade.profile_id_of(str(uuid.uuid4())) is None
    assert await facade.role_name_valid(" Admin ")
    assert not await facade.role_name_valid("moderator")
