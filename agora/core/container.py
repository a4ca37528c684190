"""Composition root: repositories -> facades -> services, wired explicitly.

Nothing here is global. Each module receives the facades it needs as
constructor parameters. ContainerProvider picks the repositories for
Settings.database_backend and hands out one container per unit of work.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from agora.application.acl import (
    CommunitiesFacade,
    PostsCleanupAdapter,
    PostsFacade,
    ReactionsCleanupAdapter,
    SubscriptionsFacade,
    UsersFacade,
)
from agora.application.services.decision_log import LoggingDecisionLog, NullDecisionLog
from agora.application.use_cases.communities import (
    CommunityCommandService,
    CommunityQueryService,
)
from agora.application.use_cases.feed import FeedQueryService
from agora.application.use_cases.posts import PostCommandService, PostQueryService
from agora.application.use_cases.reactions import (
    ReactionCommandService,
    ReactionQueryService,
)
from agora.application.use_cases.subscriptions import (
    SubscriptionCommandService,
    SubscriptionQueryService,
)
from agora.application.use_cases.users import UserCommandService, UserQueryService
from agora.core.config import Settings, get_settings
from agora.infrastructure.persistence.memory import (
    InMemoryCommunityRepository,
    InMemoryPostRepository,
    InMemoryReactionRepository,
    InMemorySubscriptionRepository,
    InMemoryUserRepository,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from agora.application.interfaces.repositories import (
        ICommunityRepository,
        IPostRepository,
        IReactionRepository,
        ISubscriptionRepository,
        IUserRepository,
    )
    from agora.application.interfaces.services import IDecisionLog


@dataclass(frozen=True)
class RepositoryBundle:
    """One repository per module."""

    communities: ICommunityRepository
    users: IUserRepository
    subscriptions: ISubscriptionRepository
    posts: IPostRepository
    reactions: IReactionRepository


def memory_repositories() -> RepositoryBundle:
    """Fresh, empty in-memory repositories."""
    return RepositoryBundle(
        communities=InMemoryCommunityRepository(),
        users=InMemoryUserRepository(),
        subscriptions=InMemorySubscriptionRepository(),
        posts=InMemoryPostRepository(),
        reactions=InMemoryReactionRepository(),
    )


def sql_repositories(session: AsyncSession) -> RepositoryBundle:
    """SQLAlchemy repositories sharing one session (one transaction)."""
    from agora.infrastructure.persistence.repositories import (
        CommunityRepository,
        PostRepository,
        ReactionRepository,
        SubscriptionRepository,
        UserRepository,
    )

    return RepositoryBundle(
        communities=CommunityRepository(session),
        users=UserRepository(session),
        subscriptions=SubscriptionRepository(session),
        posts=PostRepository(session),
        reactions=ReactionRepository(session),
    )


def build_decision_log(settings: Settings) -> IDecisionLog:
    return LoggingDecisionLog() if settings.decision_log_enabled else NullDecisionLog()


@dataclass(frozen=True)
class Container:
    """Wired facades and services for one repository bundle."""

    settings: Settings
    decision_log: IDecisionLog
    communities_facade: CommunitiesFacade
    users_facade: UsersFacade
    subscriptions_facade: SubscriptionsFacade
    posts_facade: PostsFacade
    subscriptions: SubscriptionCommandService
    subscription_queries: SubscriptionQueryService
    posts: PostCommandService
    post_queries: PostQueryService
    communities: CommunityCommandService
    community_queries: CommunityQueryService
    users: UserCommandService
    user_queries: UserQueryService
    reactions: ReactionCommandService
    reaction_queries: ReactionQueryService
    feed: FeedQueryService


def build_container(
    repositories: RepositoryBundle,
    settings: Settings | None = None,
    decision_log: IDecisionLog | None = None,
) -> Container:
    """Wire every module from a repository bundle."""
    settings = settings or get_settings()
    decision_log = decision_log or build_decision_log(settings)

    communities_facade = CommunitiesFacade(repositories.communities)
    users_facade = UsersFacade(repositories.users)
    subscriptions_facade = SubscriptionsFacade(repositories.subscriptions)
    posts_facade = PostsFacade(repositories.posts)
    reactions_cleanup = ReactionsCleanupAdapter(repositories.reactions)

    subscriptions = SubscriptionCommandService(
        repositories.subscriptions,
        communities=communities_facade,
        users=users_facade,
        decision_log=decision_log,
    )
    return Container(
        settings=settings,
        decision_log=decision_log,
        communities_facade=communities_facade,
        users_facade=users_facade,
        subscriptions_facade=subscriptions_facade,
        posts_facade=posts_facade,
        subscriptions=subscriptions,
        subscription_queries=SubscriptionQueryService(repositories.subscriptions),
        posts=PostCommandService(
            repositories.posts,
            communities=communities_facade,
            users=users_facade,
            subscriptions=subscriptions_facade,
            reactions_cleanup=reactions_cleanup,
            decision_log=decision_log,
            identity_fallback_on_delete=settings.identity_fallback_on_delete,
        ),
        post_queries=PostQueryService(repositories.posts),
        communities=CommunityCommandService(
            repositories.communities,
            communities=communities_facade,
            users=users_facade,
            provisioning=subscriptions,
            posts_cleanup=PostsCleanupAdapter(repositories.posts),
            reactions_cleanup=reactions_cleanup,
            decision_log=decision_log,
        ),
        community_queries=CommunityQueryService(repositories.communities),
        users=UserCommandService(repositories.users),
        user_queries=UserQueryService(repositories.users),
        reactions=ReactionCommandService(
            repositories.reactions, posts=posts_facade, users=users_facade
        ),
        reaction_queries=ReactionQueryService(repositories.reactions),
        feed=FeedQueryService(
            subscriptions_facade,
            posts_facade,
            default_limit=settings.feed_default_limit,
            max_limit=settings.feed_max_limit,
        ),
    )


class ContainerProvider:
    """Containers for the configured backend, one per unit of work.

    memory: every scope shares one set of in-memory repositories.
    postgres: every scope gets SQL repositories over a fresh transactional
    session, committed when the scope exits cleanly and rolled back when it
    raises.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        decision_log: IDecisionLog | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.decision_log = decision_log or build_decision_log(self.settings)
        self._memory = (
            memory_repositories() if self.settings.database_backend == "memory" else None
        )

    @asynccontextmanager
    async def scope(self) -> AsyncIterator[Container]:
        """Yield a container; raises SqlNotConfiguredException when postgres has no engine."""
        if self._memory is not None:
            yield build_container(self._memory, self.settings, self.decision_log)
            return
        from agora.infrastructure.persistence.database import session_scope

        async with session_scope() as session:
            yield build_container(
                sql_repositories(session), self.settings, self.decision_log
            )
