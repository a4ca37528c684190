"""Feed use cases."""

from agora.application.use_cases.feed.get_user_feed import FeedQueryService

__all__ = ["FeedQueryService"]
