"""
Core components for StreamVault.

This module contains the title sanitizer, release parser, alias sources,
pipeline statistics and the stream matching pipeline.
"""

from .normalization import sanitize_title, title_words, transliterate
from .statistics import PipelineMetrics, StatisticsCollector, get_statistics_collector

__all__ = [
    "PipelineMetrics",
    "StatisticsCollector",
    "get_statistics_collector",
    "sanitize_title",
    "title_words",
    "transliterate",
]
