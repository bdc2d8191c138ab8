"""
Operating modes wrapping a DecisionReport.

Assert mode halts the pipeline when no release is needed; informational
mode only prints. Both consume the same report, the decision itself does
not know which mode it runs under.
"""
import logging

from .errors import ReleaseNotNeededError
from .models import DecisionReport


logger = logging.getLogger(__name__)


def format_report(report: DecisionReport) -> str:
    """Plain-text rendering used for console output."""
    lines = [f"Release needed: {report.release_needed}"]
    lines.extend(f"  - {reason}" for reason in report.reasons)
    return "\n".join(lines)


def assert_release_needed(report: DecisionReport) -> DecisionReport:
    """
    Print all reasons and raise if the release is not needed.

    Raises:
        ReleaseNotNeededError: If report.release_needed is False
    """
    print(format_report(report))
    if not report.release_needed:
        raise ReleaseNotNeededError(report)

    for reason in report.reasons:
        logger.info(f"Release criteria met: {reason}")
    return report


def report_release_needed(report: DecisionReport) -> DecisionReport:
    """Print the outcome and all reasons; never halts."""
    print(format_report(report))
    logger.info(f"Release needed: {report.release_needed} (decided by {report.applied_rule})")
    return report
