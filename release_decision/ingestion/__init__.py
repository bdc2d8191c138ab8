"""
Ingestion layer for the release decision.

Reads the inputs the decision engine consumes:
- Skip signals from the CI environment and commit message
- Per-module comparison results written by the comparison subsystem
- The current version
"""
from .base_adapter import BaseAdapter, SourceHealth
from .comparison_adapter import ComparisonResultsAdapter
from .signals_provider import SignalsProvider
from .version_source import VersionSource

__all__ = [
    "BaseAdapter",
    "SourceHealth",
    "ComparisonResultsAdapter",
    "SignalsProvider",
    "VersionSource",
]
