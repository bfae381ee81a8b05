"""Unit tests for observability module."""

import io
import json
import logging
import sys

from opentelemetry.trace import StatusCode
import pytest

from near_proximity.observability import (
    ENUMERATION_LATENCY,
    WINDOWS_EMITTED,
    JsonFormatter,
    configure_logging,
    create_span,
    get_metrics,
    get_metrics_content_type,
    get_trace_context,
    init_metrics,
    init_tracing,
    set_trace_context,
    trace_context,
    track_latency,
)
from near_proximity.observability.context import update_span_id
from near_proximity.observability.metrics import MetricBridge


def _record(msg: str = "test message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="near_proximity.proximity",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_includes_trace_context(self):
        data = json.loads(JsonFormatter().format(_record()))

        assert data["message"] == "test message"
        assert data["level"] == "INFO"
        assert data["component"] == "proximity"
        assert "timestamp" in data
        assert "trace_id" in data
        assert "span_id" in data

    def test_format_includes_extra_fields(self):
        record = _record()
        record.keyword_count = 3
        data = json.loads(JsonFormatter().format(record))

        assert data["keyword_count"] == 3
        assert "pathname" not in data

    def test_format_includes_command_from_context(self):
        set_trace_context("a" * 32, "b" * 16, command="windows")
        data = json.loads(JsonFormatter().format(_record()))

        assert data["command"] == "windows"
        assert data["trace_id"] == "a" * 32
        trace_context.set(None)

    def test_format_truncates_and_redacts(self):
        record = _record("x" * 5000)
        record.api_key = "secret"
        data = json.loads(JsonFormatter().format(record))

        assert data["message"].endswith("...")
        assert data["api_key"] == "[REDACTED]"

    def test_format_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()
        data = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: boom" in data["exception"]

    def test_json_default_handles_set_and_bytes(self):
        formatter = JsonFormatter()
        assert formatter._json_default({3, 1, 2}) == [1, 2, 3]
        assert formatter._json_default(b"ok") == "ok"

    def test_json_default_handles_unorderable_set(self):
        value = JsonFormatter()._json_default({1, "a"})
        assert isinstance(value, list)
        assert len(value) == 2


@pytest.mark.unit
class TestConfigureLogging:
    def test_json_output_to_stream(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging("debug", True, stream=stream)

        logging.getLogger("near_proximity.test").debug("hello")

        assert restore_root_logger.level == logging.DEBUG
        assert json.loads(stream.getvalue())["message"] == "hello"

    def test_plain_output_and_overrides(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging("info", False, logger_levels={"noisy": "error"}, stream=stream)

        logging.getLogger("near_proximity.test").info("plain")

        assert "INFO [near_proximity.test] plain" in stream.getvalue()
        assert logging.getLogger("noisy").level == logging.ERROR
        assert len(restore_root_logger.handlers) == 1


@pytest.mark.unit
class TestTraceContext:
    """Tests for trace context propagation."""

    def test_get_trace_context_generates_ids(self):
        trace_context.set(None)
        ctx = get_trace_context()
        assert len(ctx["trace_id"]) == 32
        assert len(ctx["span_id"]) == 16

    def test_update_span_id_keeps_trace_id(self):
        set_trace_context("t" * 32, "s" * 16)
        update_span_id("n" * 16)
        ctx = get_trace_context()
        assert ctx == {"trace_id": "t" * 32, "span_id": "n" * 16}
        trace_context.set(None)


@pytest.mark.unit
class TestTracing:
    def test_init_tracing_is_idempotent(self):
        assert init_tracing() is init_tracing()

    def test_create_span_sets_attributes_and_span_id(self):
        with create_span("near_proximity.test", attributes={"cli.command": "windows"}) as span:
            ctx = get_trace_context()
            assert ctx["span_id"] == format(span.get_span_context().span_id, "016x")

    def test_create_span_records_errors(self):
        with pytest.raises(ValueError):
            with create_span("near_proximity.failing") as span:
                raise ValueError("bad")
        assert span.status.status_code == StatusCode.ERROR


@pytest.mark.unit
class TestMetrics:
    def test_track_latency_observes_histogram(self):
        with track_latency(ENUMERATION_LATENCY, command="test"):
            pass
        assert b'proximity_enumeration_latency_seconds_count{command="test"}' in get_metrics()

    def test_windows_counter(self):
        WINDOWS_EMITTED.labels(command="test").inc(4)
        assert b"proximity_windows_emitted_total" in get_metrics()

    def test_init_metrics_is_idempotent(self):
        assert init_metrics() is init_metrics()

    def test_unknown_kind_raises(self):
        bridge = MetricBridge(object(), otel_name="x", otel_description="x", otel_kind="summary")
        with pytest.raises(ValueError, match="Unknown metric kind"):
            bridge._ensure_otel_instrument()

    def test_content_type(self):
        assert get_metrics_content_type().startswith("text/plain")
