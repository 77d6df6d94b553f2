"""Unit tests for core.metrics module."""

from prometheus_client import REGISTRY

from tzmeta.core.metrics import FETCH_COUNTER, RESOLVE_COUNTER, RESOLVE_DURATION_SECONDS


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetrics:
    """Module-level metric objects."""

    def test_resolve_counter_labelled_by_shape(self) -> None:
        before = _sample("tzmeta_resolve_hops_total", {"shape": "raw_fallback"})
        RESOLVE_COUNTER.labels(shape="raw_fallback").inc()
        assert _sample("tzmeta_resolve_hops_total", {"shape": "raw_fallback"}) == before + 1

    def test_fetch_counter_labelled_by_outcome(self) -> None:
        before = _sample("tzmeta_fetches_total", {"outcome": "ok"})
        FETCH_COUNTER.labels(outcome="ok").inc()
        assert _sample("tzmeta_fetches_total", {"outcome": "ok"}) == before + 1

    def test_duration_histogram(self) -> None:
        before = _sample("tzmeta_resolve_duration_seconds_count")
        RESOLVE_DURATION_SECONDS.observe(0.2)
        assert _sample("tzmeta_resolve_duration_seconds_count") == before + 1
