"""Span outcome recording and the traced decorator."""

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from agora.domain.exceptions import AuthorizationException, FacadeCallException
from agora.shared.telemetry.tracing import _record_outcome, traced


@pytest.fixture
def tracer_and_exporter():
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider.get_tracer("agora-tests"), exporter


def test_domain_rejection_is_event_not_error(tracer_and_exporter) -> None:
    tracer, exporter = tracer_and_exporter
    with tracer.start_as_current_span("posts.delete_post") as span:
        _record_outcome(span, AuthorizationException("delete_requires_admin"))

    (finished,) = exporter.get_finished_spans()
    assert finished.status.status_code is StatusCode.OK
    assert finished.events[0].name == "domain.rejected"
    assert finished.events[0].attributes["error_code"] == "PERMISSION_DENIED"


def test_facade_failure_marks_span_error(tracer_and_exporter) -> None:
    tracer, exporter = tracer_and_exporter
    with tracer.start_as_current_span("subscriptions.subscribe") as span:
        _record_outcome(span, FacadeCallException("users", "exists", "TimeoutError"))

    (finished,) = exporter.get_finished_spans()
    assert finished.status.status_code is StatusCode.ERROR


async def test_traced_async_returns_and_reraises() -> None:
    @traced("tests.ok")
    async def ok(value: int) -> int:
        return value * 2

    @traced("tests.fail")
    async def fail() -> None:
        raise AuthorizationException("rule")

    assert await ok(21) == 42
    with pytest.raises(AuthorizationException):
        await fail()


def test_traced_sync_function() -> None:
    @traced()
    def add(a: int, b: int) -> int:
        return a + b

    assert add(1, 2) == 3
    assert add.__name__ == "add"
