"""Gate decisions shared by the authorization engines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from agora.application.services.decision_log import DecisionRecord
from agora.domain.enums import DecisionOutcome
from agora.domain.exceptions import AuthorizationException

if TYPE_CHECKING:
    from agora.application.interfaces.services import IDecisionLog


@dataclass(frozen=True)
class Decision:
    """Outcome of a pure policy function. rule names what matched (allow or deny)."""

    outcome: DecisionOutcome
    rule: str
    message: str | None = None

    @classmethod
    def allow(cls, rule: str) -> Decision:
        return cls(DecisionOutcome.ALLOW, rule)

    @classmethod
    def deny(cls, rule: str, message: str) -> Decision:
        return cls(DecisionOutcome.DENY, rule, message)

    @property
    def allowed(self) -> bool:
        return self.outcome is DecisionOutcome.ALLOW

    def raise_if_denied(self) -> None:
        """Raises AuthorizationException naming the rule when denied."""
        if not self.allowed:
            raise AuthorizationException(self.rule, self.message or "Permission denied")


class GateRecorder:
    """Records gate outcomes for one operation invocation to the decision log."""

    def __init__(
        self,
        decision_log: IDecisionLog,
        operation: str,
        *,
        actor_id: str | None = None,
        target_id: str | None = None,
        community_id: str | None = None,
    ) -> None:
        self._log = decision_log
        self.operation = operation
        self.actor_id = actor_id
        self.target_id = target_id
        self.community_id = community_id

    def record(self, gate: str, outcome: DecisionOutcome, rule: str | None = None) -> None:
        self._log.record(
            DecisionRecord(
                operation=self.operation,
                gate=gate,
                outcome=outcome,
                rule=rule,
                actor_id=self.actor_id,
                target_id=self.target_id,
                community_id=self.community_id,
            )
        )

    def deny(self, gate: str, rule: str) -> None:
        self.record(gate, DecisionOutcome.DENY, rule)

    def enforce(self, gate: str, decision: Decision) -> None:
        """Record the decision, then raise AuthorizationException if it is a denial."""
        self.record(gate, decision.outcome, decision.rule)
        decision.raise_if_denied()
