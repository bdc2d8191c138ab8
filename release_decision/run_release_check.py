#!/usr/bin/env python3
"""
CI entry points for the release decision.

Collects every input the decision engine needs, runs it once and
post-processes the report in one of two modes:

- assert-release-needed: prints the reasons and exits non-zero when no
  release is needed, so the CI job stops before publishing.
- release-needed: prints the outcome and reasons and always succeeds.
  Useful for dry runs and diagnosing why a release was (not) triggered.

Inputs are gathered in order:
1. Skip signals from the environment and the commit message
2. Comparison results written by the per-module comparison step
3. The current version (informational only)

Usage:
    assert-release-needed [--config config.yaml] [--branch NAME]
    release-needed [--config config.yaml] [--commit-message TEXT]
"""
import sys
import yaml
import logging
import argparse
from pathlib import Path
from typing import Callable, Optional, Sequence

from decisioning import (
    DecisionEngine,
    DecisionExplainer,
    DecisionReport,
    InvalidInputError,
    ReleaseNotNeededError,
    assert_release_needed,
    report_release_needed,
)
from ingestion import ComparisonResultsAdapter, SignalsProvider, VersionSource
from observability import DecisionReporter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_BRANCH_REGEX = "master|release/.+"


class ReleaseCheck:
    """
    Assembles decision inputs from configuration and runs the engine.

    The engine only ever sees finalized inputs: signals are read and all
    comparison results are loaded before decide() is called.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(self.config_path) as f:
            self.config = yaml.safe_load(f) or {}

        if "git" not in self.config:
            raise InvalidInputError("Missing required config key: git")

        self.branch_regex = (self.config["git"] or {}).get("releasable_branch_regex", DEFAULT_BRANCH_REGEX)
        self.signals_provider = SignalsProvider(self.config.get("signals"))
        self.comparisons = ComparisonResultsAdapter(self.config.get("comparisons") or {})
        self.version_source = (
            VersionSource(self.config["version"]) if self.config.get("version") else None
        )
        self.engine = DecisionEngine(
            explainer=DecisionExplainer(self.config.get("explanations"))
        )
        self.reporter = DecisionReporter()

        logger.info(f"Release check initialized with config: {config_path}")

    def decide(
        self,
        branch: Optional[str] = None,
        commit_message: Optional[str] = None,
        branch_regex: Optional[str] = None
    ) -> DecisionReport:
        """
        Gather inputs and run the decision engine once.

        Raises:
            InvalidInputError: Malformed configuration or comparison results
        """
        signals = self.signals_provider.read(branch=branch, commit_message=commit_message)
        try:
            comparisons = self.comparisons.fetch()
        finally:
            self._log_comparison_health()
        return self.engine.decide(signals, branch_regex or self.branch_regex, comparisons)

    def _log_comparison_health(self):
        health = self.comparisons.get_health()
        if health.is_healthy:
            logger.info(
                f"Source {health.source_id}: {health.records_fetched} comparison results"
            )
        else:
            logger.warning(f"Source {health.source_id} unhealthy: {health.error_message}")

    def resolve_version(self) -> Optional[str]:
        """
        Resolve the version under release for logging and reports.

        The version never affects the decision, so a missing version file
        is logged and yields None.
        """
        if self.version_source is None:
            return None
        try:
            return self.version_source.resolve()
        except InvalidInputError as e:
            logger.warning(f"Could not resolve version: {e}")
            return None

    def save_report(
        self,
        report: DecisionReport,
        output_dir: Path,
        version: Optional[str] = None
    ) -> Path:
        markdown = self.reporter.generate_report(report, version=version)
        path = self.reporter.save_report(markdown, output_dir)
        logger.info(f"Decision report: {path}")
        return path


def build_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)"
    )
    parser.add_argument(
        "--branch",
        help="Branch under build (default: read from the configured env variable)"
    )
    parser.add_argument(
        "--commit-message",
        help="Commit message to scan for directives (default: read from the configured env variable)"
    )
    parser.add_argument(
        "--branch-regex",
        help="Releasable branch regex overriding git.releasable_branch_regex"
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        help="Directory to write a Markdown decision report to"
    )
    return parser


def _run(
    mode: Callable[[DecisionReport], DecisionReport],
    description: str,
    argv: Optional[Sequence[str]] = None
):
    args = build_parser(description).parse_args(argv)

    try:
        check = ReleaseCheck(config_path=args.config)
        report = check.decide(
            branch=args.branch,
            commit_message=args.commit_message,
            branch_regex=args.branch_regex
        )

        version = check.resolve_version()
        if version:
            logger.info(f"Version: {version}")

        report_dir = args.report_dir or (check.config.get("reporting") or {}).get("output_dir")
        if report_dir:
            check.save_report(report, Path(report_dir), version=version)

        mode(report)

    except ReleaseNotNeededError as e:
        logger.error(str(e))
        sys.exit(1)

    except Exception as e:
        logger.error(f"Release check failed: {e}")
        sys.exit(1)

    sys.exit(0)


def assert_main(argv: Optional[Sequence[str]] = None):
    """CLI entry point: fail the build when release is not needed."""
    _run(
        assert_release_needed,
        "Asserts that criteria for the release are met and fails if release is not needed.",
        argv
    )


def report_main(argv: Optional[Sequence[str]] = None):
    """CLI entry point: print whether release criteria are met."""
    _run(
        report_release_needed,
        "Checks and prints whether criteria for the release are met.",
        argv
    )


if __name__ == "__main__":
    report_main()
