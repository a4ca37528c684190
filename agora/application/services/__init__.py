"""Application services: authorization policy, identity reconciliation, decision log."""

from agora.application.services.decision_log import (
    DecisionRecord,
    InMemoryDecisionLog,
    LoggingDecisionLog,
    NullDecisionLog,
)
from agora.application.services.identity_reconciliation import (
    OwnershipResolution,
    call_facade,
    resolve_ownership_with_identity_fallback,
)
from agora.application.services.policy import Decision, GateRecorder
from agora.application.services.post_authorization import (
    EffectiveRole,
    EffectiveRoleResolver,
    evaluate_delete,
    evaluate_publish,
)
from agora.application.services.subscription_authorization import (
    RequesterPrivilege,
    SubscribeFacts,
    UnsubscribeFacts,
    evaluate_owner_grant,
    evaluate_subscribe,
    evaluate_unsubscribe,
    resolve_granted_role,
)

__all__ = [
    "Decision",
    "DecisionRecord",
    "EffectiveRole",
    "EffectiveRoleResolver",
    "GateRecorder",
    "InMemoryDecisionLog",
    "LoggingDecisionLog",
    "NullDecisionLog",
    "OwnershipResolution",
    "RequesterPrivilege",
    "SubscribeFacts",
    "UnsubscribeFacts",
    "call_facade",
    "evaluate_delete",
    "evaluate_owner_grant",
    "evaluate_publish",
    "evaluate_subscribe",
    "evaluate_unsubscribe",
    "resolve_granted_role",
    "resolve_ownership_with_identity_fallback",
]
