"""Reactions and the announcements feed over the in-memory container."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from agora.core.container import Container
from agora.domain.entities import PostEntity
from agora.domain.enums import PostKind, ReactionType
from agora.domain.exceptions import ResourceNotFoundException, ValidationException
from agora.domain.value_objects import PostContent
from agora.shared.utils.generators import generate_document_id

DESCRIPTION = "Neighbourhood news and events"
CONTENT = "# Notice\nWater is off on Monday."


async def _community(container: Container, owner_id: str) -> str:
    outcome = await container.communities.create_community(owner_id, "Neighbours", DESCRIPTION)
    return outcome.community.id


async def test_reaction_upsert_changes_type_in_place(
    container: Container, register_user
) -> None:
    owner = await register_user()
    community_id = await _community(container, owner.user_id)
    post_id = str(await container.posts.publish_post(owner.user_id, community_id, CONTENT))

    first = await container.reactions.add_reaction(post_id, owner.user_id, "like")
    second = await container.reactions.add_reaction(post_id, owner.user_id, ReactionType.LOVE)

    assert second.id == first.id
    assert second.type is ReactionType.LOVE
    summary = await container.reaction_queries.summary_by_post(post_id)
    assert summary.total == 1
    assert summary.counts["love"] == 1
    assert summary.counts["like"] == 0


async def test_reaction_on_missing_post_not_found(
    container: Container, register_user
) -> None:
    user = await register_user()

    with pytest.raises(ResourceNotFoundException):
        await container.reactions.add_reaction(generate_document_id(), user.user_id, "wow")


async def test_unknown_reaction_type_rejected(
    container: Container, register_user
) -> None:
    user = await register_user()

    with pytest.raises(ValidationException):
        await container.reactions.add_reaction(generate_document_id(), user.user_id, "meh")


async def test_remove_reaction(container: Container, register_user) -> None:
    owner = await register_user()
    community_id = await _community(container, owner.user_id)
    post_id = str(await container.posts.publish_post(owner.user_id, community_id, CONTENT))
    await container.reactions.add_reaction(post_id, owner.user_id, "sad")

    await container.reactions.remove_reaction(post_id, owner.user_id)

    assert await container.reaction_queries.user_reaction_on_post(post_id, owner.user_id) is None
    with pytest.raises(ResourceNotFoundException):
        await container.reactions.remove_reaction(post_id, owner.user_id)


async def test_deleting_post_removes_its_reactions(
    container: Container, register_user
) -> None:
    owner = await register_user()
    community_id = await _community(container, owner.user_id)
    post_id = str(await container.posts.publish_post(owner.user_id, community_id, CONTENT))
    await container.reactions.add_reaction(post_id, owner.user_id, "haha")

    outcome = await container.posts.delete_post(owner.user_id, post_id)

    assert outcome.reactions_deleted == 1
    assert await container.reaction_queries.list_by_post(post_id) == []


async def _seed_post(
    container: Container, community_id: str, author_id: str, kind: PostKind, minutes: int
) -> str:
    post = PostEntity(
        id=generate_document_id(),
        community_id=community_id,
        author_id=author_id,
        content=PostContent(CONTENT),
        kind=kind,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes),
    )
    await container.posts.post_repo.add(post)
    return post.id


async def test_feed_lists_announcements_of_subscribed_communities_newest_first(
    container: Container, register_user
) -> None:
    owner = await register_user()
    reader = await register_user()
    followed = await _community(container, owner.user_id)
    other = await _community(container, owner.user_id)
    await container.subscriptions.subscribe(reader.user_id, reader.user_id, followed)
    older = await _seed_post(container, followed, owner.user_id, PostKind.ANNOUNCEMENT, 1)
    newer = await _seed_post(container, followed, owner.user_id, PostKind.ANNOUNCEMENT, 5)
    await _seed_post(container, followed, owner.user_id, PostKind.MESSAGE, 9)
    await _seed_post(container, other, owner.user_id, PostKind.ANNOUNCEMENT, 10)

    feed = await container.feed.get_user_feed(reader.user_id)

    assert [item.post_id for item in feed] == [newer, older]
    assert {item.community_id for item in feed} == {followed}


async def test_feed_pagination_and_limit_cap(
    container: Container, register_user
) -> None:
    owner = await register_user()
    community_id = await _community(container, owner.user_id)
    ids = [
        await _seed_post(container, community_id, owner.user_id, PostKind.ANNOUNCEMENT, m)
        for m in range(5)
    ]

    page = await container.feed.get_user_feed(owner.user_id, limit=2, offset=1)
    capped = await container.feed.get_user_feed(owner.user_id, limit=10_000)

    assert [item.post_id for item in page] == [ids[3], ids[2]]
    assert len(capped) == 5


async def test_feed_empty_without_subscriptions(
    container: Container, register_user
) -> None:
    loner = await register_user()
    assert await container.feed.get_user_feed(loner.user_id) == []


async def test_feed_rejects_bad_paging(container: Container) -> None:
    with pytest.raises(ValidationException):
        await container.feed.get_user_feed(str(uuid.uuid4()), limit=0)
    with pytest.raises(ValidationException):
        await container.feed.get_user_feed(str(uuid.uuid4()), offset=-1)
