"""User feed: announcements from every community the user is subscribed to."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agora.application.dtos.common import parse_value
from agora.application.dtos.feed import FeedItem
from agora.application.services.identity_reconciliation import call_facade
from agora.domain.enums import PostKind
from agora.domain.exceptions import ValidationException
from agora.domain.value_objects import UserId
from agora.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from agora.application.interfaces.facades import IPostsFacade, ISubscriptionsFacade


class FeedQueryService:
    """Thin consumer of the subscriptions and posts facades."""

    def __init__(
        self,
        subscriptions: ISubscriptionsFacade,
        posts: IPostsFacade,
        *,
        default_limit: int = 20,
        max_limit: int = 100,
    ) -> None:
        self.subscriptions = subscriptions
        self.posts = posts
        self.default_limit = default_limit
        self.max_limit = max_limit

    @traced("feed.get_user_feed")
    async def get_user_feed(
        self, user_id: str, limit: int | None = None, offset: int | None = None
    ) -> list[FeedItem]:
        """Return announcements of the user's communities, newest first.

        limit defaults to default_limit and is capped at max_limit.
        """
        uid = str(parse_value(UserId, user_id, "user_id"))
        if offset is not None and offset < 0:
            raise ValidationException("offset must be >= 0", field="offset")
        if limit is not None and limit < 1:
            raise ValidationException("limit must be >= 1", field="limit")
        page_limit = min(limit or self.default_limit, self.max_limit)

        community_ids = await call_facade(
            self.subscriptions.community_ids_of(uid),
            facade="subscriptions",
            operation="community_ids_of",
        )
        if not community_ids:
            return []
        posts = await call_facade(
            self.posts.posts_by_communities(
                community_ids,
                kind=PostKind.ANNOUNCEMENT,
                limit=page_limit,
                offset=offset or 0,
            ),
            facade="posts",
            operation="posts_by_communities",
        )
        return [FeedItem.from_post(p) for p in posts]
