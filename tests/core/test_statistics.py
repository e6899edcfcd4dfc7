"""Tests for the pipeline statistics collector."""

from __future__ import annotations

import threading

import pytest

from streamvault.core.statistics import (
    PipelineMetrics,
    StatisticsCollector,
    get_statistics_collector,
)


class TestPipelineMetrics:
    def test_cache_hit_ratio_without_lookups(self) -> None:
        assert PipelineMetrics().cache_hit_ratio == 0.0

    def test_cache_hit_ratio(self) -> None:
        metrics = PipelineMetrics(cache_hits=3, cache_misses=1)
        assert metrics.cache_hit_ratio == 0.75


class TestStatisticsCollector:
    """Counters, timings and the summary."""

    def test_record_search(self) -> None:
        collector = StatisticsCollector()

        collector.record_search(success=True, result_count=12, duration=0.5)
        collector.record_search(success=False, duration=0.25)

        metrics = collector.metrics
        assert metrics.searches_issued == 2
        assert metrics.searches_failed == 1
        assert metrics.raw_candidates == 12
        assert metrics.search_time == 0.75

    def test_candidate_counters(self) -> None:
        collector = StatisticsCollector()

        collector.record_rejected(2)
        collector.record_duplicates()
        collector.record_unmatched(4)
        collector.record_streams_returned(7)

        metrics = collector.metrics
        assert (metrics.rejected_candidates, metrics.duplicate_candidates) == (2, 1)
        assert (metrics.unmatched_candidates, metrics.streams_returned) == (4, 7)

    def test_filter_fallbacks_per_stage(self) -> None:
        collector = StatisticsCollector()

        collector.record_filter_fallback("quality")
        collector.record_filter_fallback("quality")
        collector.record_filter_fallback("max_size")

        assert collector.metrics.filter_fallbacks == {"quality": 2, "max_size": 1}

    def test_summary(self) -> None:
        collector = StatisticsCollector()
        collector.record_cache_hit()
        collector.record_cache_miss()
        collector.record_timing("search_call", 0.2)
        collector.record_timing("search_call", 0.4)

        summary = collector.get_summary()

        assert summary["cache_hits"] == 1
        assert summary["cache_hit_ratio"] == 0.5
        assert summary["average_timings"]["search_call"] == pytest.approx(0.3)
        assert "session_start" in summary

    def test_reset(self) -> None:
        collector = StatisticsCollector()
        collector.record_rejected(5)
        collector.record_timing("find_streams", 1.0)

        collector.reset()

        assert collector.metrics == PipelineMetrics()
        assert collector.get_summary()["average_timings"] == {}

    def test_concurrent_updates(self) -> None:
        collector = StatisticsCollector()

        def _work() -> None:
            for _ in range(1000):
                collector.record_search(success=True, result_count=1)

        threads = [threading.Thread(target=_work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert collector.metrics.searches_issued == 8000
        assert collector.metrics.raw_candidates == 8000


def test_global_collector_is_shared() -> None:
    assert get_statistics_collector() is get_statistics_collector()
