"""Decision log: one immutable record per authorization gate evaluation.

Records are a side concern; they never change the outcome of the operation
that produced them.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from agora.domain.enums import DecisionOutcome
from agora.shared.telemetry.logging import DECISION_LOGGER_NAME
from agora.shared.utils.datetime import utc_now


@dataclass(frozen=True)
class DecisionRecord:
    """Outcome of one gate (e.g. subscribe/policy) with the rule that matched."""

    operation: str
    gate: str
    outcome: DecisionOutcome
    rule: str | None = None
    actor_id: str | None = None
    target_id: str | None = None
    community_id: str | None = None
    at: datetime = field(default_factory=utc_now)

    @property
    def allowed(self) -> bool:
        return self.outcome is DecisionOutcome.ALLOW

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["outcome"] = self.outcome.value
        data["at"] = self.at.isoformat()
        return data


class LoggingDecisionLog:
    """Writes each record as one INFO line on the agora.decisions logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(DECISION_LOGGER_NAME)

    def record(self, decision: DecisionRecord) -> None:
        self._logger.info(
            "decision operation=%s gate=%s outcome=%s rule=%s actor=%s target=%s community=%s",
            decision.operation,
            decision.gate,
            decision.outcome.value,
            decision.rule or "-",
            decision.actor_id or "-",
            decision.target_id or "-",
            decision.community_id or "-",
        )


class InMemoryDecisionLog:
    """Keeps records in memory for inspection (tests, local debugging)."""

    def __init__(self) -> None:
        self.records: list[DecisionRecord] = []

    def record(self, decision: DecisionRecord) -> None:
        self.records.append(decision)

    def for_operation(self, operation: str) -> list[DecisionRecord]:
        return [r for r in self.records if r.operation == operation]

    def denials(self) -> list[DecisionRecord]:
        return [r for r in self.records if r.outcome is DecisionOutcome.DENY]

    def clear(self) -> None:
        self.records.clear()


class NullDecisionLog:
    """Discards records (decision_log_enabled=False)."""

    def record(self, decision: DecisionRecord) -> None:
        return None
