"""
StreamVault - Media Stream Discovery Pipeline

Discovers, deduplicates, matches, ranks and filters playable media file
candidates returned by an upstream full-text content search service.
"""

__version__ = "0.3.0"
__author__ = "StreamVault Team"

from .core import StatisticsCollector, get_statistics_collector

__all__ = [
    "StatisticsCollector",
    "get_statistics_collector",
]
