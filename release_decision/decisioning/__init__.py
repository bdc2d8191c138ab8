"""
Release decisioning layer.

Provides a deterministic, explainable decision on whether a multi-module
build should produce a release, using a priority-ordered rule chain and
per-module publication comparisons.
"""
from .errors import InvalidInputError, ReleaseDecisionError, ReleaseNotNeededError
from .models import ComparisonResult, DecisionReport, SkipSignals
from .rules import ReleasabilityRule, Rule, Verdict, get_default_rules
from .rule_engine import DecisionEngine
from .explainer import DecisionExplainer
from .modes import assert_release_needed, format_report, report_release_needed


__all__ = [
    'ComparisonResult',
    'DecisionEngine',
    'DecisionExplainer',
    'DecisionReport',
    'InvalidInputError',
    'ReleasabilityRule',
    'ReleaseDecisionError',
    'ReleaseNotNeededError',
    'Rule',
    'SkipSignals',
    'Verdict',
    'assert_release_needed',
    'format_report',
    'get_default_rules',
    'report_release_needed',
]
