"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from agora.shared.telemetry.logging import (
    DECISION_LOGGER_NAME,
    get_logger,
    setup_logging,
)
from agora.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "DECISION_LOGGER_NAME",
    "add_span_attributes",
    "add_span_event",
    "get_logger",
    "setup_logging",
    "traced",
]
