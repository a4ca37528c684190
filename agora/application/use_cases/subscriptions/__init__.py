"""Subscription use cases."""

from agora.application.use_cases.subscriptions.subscription_operations import (
    SubscriptionCommandService,
    SubscriptionQueryService,
)

__all__ = ["SubscriptionCommandService", "SubscriptionQueryService"]
