"""
Explanation generator for release decisions.

Turns reason codes and their evidence into the reason lines that end up
in a DecisionReport.
"""
from typing import Any, Dict, Optional

from .errors import InvalidInputError


class DecisionExplainer:
    """
    Renders reason lines from templates keyed by reason code.

    Templates may reference any evidence key with str.format syntax,
    e.g. "{branch_name} is not releasable".
    """

    DEFAULT_TEMPLATES = {
        'EXPLICIT_SKIP': "explicit skip requested",
        'PULL_REQUEST': "pull request build",
        'SKIP_RELEASE': "skip-release directive present in commit",
        'BRANCH_NOT_RELEASABLE': "branch does not match releasable pattern",
        'BRANCH_RELEASABLE': "branch is releasable",
        'FORCED_RELEASE': (
            "release forced: skip-compare-publications directive present"
        ),
        'NO_COMPARISONS': "no comparison results available",
        'MODULE_COMPARISON': "{module_id}: {description}",
    }

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """
        Args:
            templates: Templates overriding the defaults for some reason codes.
        """
        self.templates = dict(self.DEFAULT_TEMPLATES)
        if templates:
            self.templates.update(templates)

    def explain(self, reason_code: str, evidence: Optional[Dict[str, Any]] = None) -> str:
        """
        Generate a reason line from reason code and evidence.

        Raises:
            InvalidInputError: Unknown reason code, or a template referencing
                evidence that was not provided
        """
        template = self.templates.get(reason_code)
        if template is None:
            raise InvalidInputError(f"No explanation template for reason code {reason_code}")

        values = {k: '' if v is None else v for k, v in (evidence or {}).items()}
        try:
            return template.format(**values).strip()
        except KeyError as e:
            raise InvalidInputError(
                f"Template for {reason_code} references missing value {e}"
            ) from e

    def explain_comparison(self, comparison) -> str:
        return self.explain('MODULE_COMPARISON', {
            'module_id': comparison.module_id,
            'description': comparison.description,
            'changed': comparison.changed,
        })
