"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time

import pytest

from invoicectl.services.result import ServiceResult
from invoicectl.services.telemetry import (
    Span,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)

# ── Span ──────────────────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="s").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="s")
        time.sleep(0.002)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_nested_with_annotations(self) -> None:
        root = Span(name="root")
        child = Span(name="child")
        child.annotate("entries", 3)
        root.children.append(child)
        d = root.to_dict()
        assert d["children"][0]["annotations"] == {"entries": 3}


# ── trace_span ────────────────────────────────────────────────────────


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_enabled_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None

    def test_get_current_span_disabled(self) -> None:
        assert get_current_span() is None


# ── @traced ───────────────────────────────────────────────────────────


class _Service:
    @traced
    def run(self) -> ServiceResult:
        with trace_span("step") as span:
            if span:
                span.annotate("rows", 2)
        return ServiceResult(ok=True, op="run")

    @traced
    def plain(self) -> int:
        return 7

    @traced
    def explode(self) -> ServiceResult:
        msg = "boom"
        raise RuntimeError(msg)


class TestTraced:
    def test_disabled_leaves_meta_untouched(self) -> None:
        assert _Service().run().meta is None

    def test_enabled_injects_span_tree(self) -> None:
        enable_telemetry()
        result = _Service().run()
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "_Service.run"
        assert tree["children"][0]["name"] == "step"
        assert tree["children"][0]["annotations"] == {"rows": 2}

    def test_non_result_return_passes_through(self) -> None:
        enable_telemetry()
        assert _Service().plain() == 7

    def test_exception_propagates_and_resets_span(self) -> None:
        enable_telemetry()
        with pytest.raises(RuntimeError, match="boom"):
            _Service().explode()
        assert get_current_span() is None
