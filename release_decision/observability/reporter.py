"""
Generate human-readable release decision reports in Markdown format.

Report sections:
- Header with outcome, version and deciding rule
- Signals table with every skip signal that fed the decision
- Reasons in evaluation order

Uses tabulate for GitHub-flavored tables so reports render in CI
artifacts and pull request comments.
"""
from datetime import datetime
from pathlib import Path
from typing import Optional

from tabulate import tabulate

from decisioning.models import DecisionReport


class DecisionReporter:
    """Renders DecisionReport objects as Markdown."""

    def generate_report(
        self,
        report: DecisionReport,
        version: Optional[str] = None
    ) -> str:
        """
        Generate full decision report in Markdown format.

        Args:
            report: Decision produced by the engine
            version: Version under release, if resolved

        Returns:
            Markdown-formatted report as string
        """
        lines = []

        lines.append("# Release Decision Report")
        lines.append(f"**Release needed:** {'yes' if report.release_needed else 'no'}")
        if version:
            lines.append(f"**Version:** {version}")
        if report.applied_rule:
            lines.append(f"**Decided by:** {report.applied_rule}")
        lines.append("")

        if report.signals is not None:
            lines.append("## Signals")
            signal_data = [[k, v] for k, v in report.signals.to_dict().items()]
            lines.append(tabulate(signal_data, headers=["Signal", "Value"], tablefmt="github"))
            lines.append("")

        lines.append("## Reasons")
        reason_data = [[i, reason] for i, reason in enumerate(report.reasons, start=1)]
        lines.append(tabulate(reason_data, headers=["#", "Reason"], tablefmt="github"))
        lines.append("")

        return "\n".join(lines)

    def save_report(self, report: str, output_dir: Path) -> Path:
        """
        Save report to file with timestamp.

        Args:
            report: Markdown report content
            output_dir: Directory to save report in

        Returns:
            Path to saved report file
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.utcnow().strftime("%Y%m%d-%H%M%S")
        filepath = output_dir / f"release-decision-{timestamp}.md"
        filepath.write_text(report)
        return filepath
