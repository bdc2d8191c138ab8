"""
Observability layer for release decisions.

Main exports:
- DecisionReporter: Generates Markdown decision reports
"""
from .reporter import DecisionReporter

__all__ = [
    "DecisionReporter",
]
