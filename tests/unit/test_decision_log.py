"""Decision log sinks and the GateRecorder."""

import logging

import pytest

from agora.application.services.decision_log import (
    DecisionRecord,
    InMemoryDecisionLog,
    LoggingDecisionLog,
    NullDecisionLog,
)
from agora.application.services.policy import Decision, GateRecorder
from agora.domain.enums import DecisionOutcome
from agora.domain.exceptions import AuthorizationException
from agora.shared.telemetry.logging import DECISION_LOGGER_NAME


def test_decision_record_to_dict() -> None:
    record = DecisionRecord(
        operation="subscribe",
        gate="policy",
        outcome=DecisionOutcome.DENY,
        rule="public_self_subscription_only",
        actor_id="a",
        target_id="b",
        community_id="c",
    )
    data = record.to_dict()
    assert data["outcome"] == "deny"
    assert data["rule"] == "public_self_subscription_only"
    assert isinstance(data["at"], str)
    assert not record.allowed


def test_gate_recorder_enforce_records_then_raises() -> None:
    log = InMemoryDecisionLog()
    gates = GateRecorder(log, "delete_post", actor_id="u1", community_id="c1")

    gates.enforce("policy", Decision.allow("role_permits_delete"))
    with pytest.raises(AuthorizationException):
        gates.enforce(
            "policy", Decision.deny("delete_requires_admin", "only admins or owners can delete posts")
        )

    assert [r.outcome for r in log.for_operation("delete_post")] == [
        DecisionOutcome.ALLOW,
        DecisionOutcome.DENY,
    ]
    assert log.denials()[0].community_id == "c1"
    log.clear()
    assert log.records == []


def test_logging_decision_log_writes_one_line(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggingDecisionLog()
    with caplog.at_level(logging.INFO, logger=DECISION_LOGGER_NAME):
        sink.record(
            DecisionRecord(
                operation="unsubscribe",
                gate="policy",
                outcome=DecisionOutcome.DENY,
                rule="owner_cannot_unsubscribe",
            )
        )

    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert "operation=unsubscribe" in message
    assert "rule=owner_cannot_unsubscribe" in message
    assert "actor=-" in message


def test_null_decision_log_discards() -> None:
    assert NullDecisionLog().record(
        DecisionRecord(operation="x", gate="y", outcome=DecisionOutcome.ALLOW)
    ) is None
