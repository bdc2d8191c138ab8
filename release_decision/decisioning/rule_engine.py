"""
Decision engine that combines branch releasability with per-module
publication comparisons.

The engine is a pure function of its inputs: it performs no I/O, keeps no
state between calls and never logs. Callers decide what to do with the
returned report.
"""
from typing import List, Optional, Sequence

from .errors import InvalidInputError
from .explainer import DecisionExplainer
from .models import ComparisonResult, DecisionReport, SkipSignals
from .rules import BranchPattern, ReleasabilityRule, Rule, compile_branch_pattern


FORCED_RELEASE_STAGE = "FORCED_RELEASE"
NO_COMPARISONS_STAGE = "NO_COMPARISONS"
COMPARE_PUBLICATIONS_STAGE = "COMPARE_PUBLICATIONS"


class DecisionEngine:
    """
    Decides whether a release is needed.

    Evaluation order:
    1. Releasability rule chain (skip flags, PR build, branch pattern).
       A non-releasable branch settles the decision immediately.
    2. [ci skip-compare-publications] forces a release without looking
       at comparisons.
    3. Any changed module publication means a release is needed.
    """

    def __init__(
        self,
        rules: Optional[List[Rule]] = None,
        explainer: Optional[DecisionExplainer] = None
    ):
        """
        Initialize the engine.

        Args:
            rules: Releasability rules. If None, uses default rules.
            explainer: Reason renderer. If None, uses default templates.
        """
        self.explainer = explainer or DecisionExplainer()
        self.releasability = ReleasabilityRule(rules, self.explainer)

    def decide(
        self,
        signals: SkipSignals,
        branch_pattern: BranchPattern,
        comparisons: Optional[Sequence[ComparisonResult]] = None
    ) -> DecisionReport:
        """
        Apply the decision rules to one build.

        Args:
            signals: Skip signals snapshot for the build
            branch_pattern: Regular expression the branch must fully match
            comparisons: Finalized comparison results, one per module

        Returns:
            DecisionReport with outcome and reasons in evaluation order

        Raises:
            InvalidInputError: Malformed branch pattern, or duplicate module ids
                on a releasable branch
        """
        pattern = compile_branch_pattern(branch_pattern)
        comparisons = tuple(comparisons) if comparisons is not None else ()

        verdict = self.releasability.check(signals, pattern)
        branch_reason = self.explainer.explain(verdict.reason_code, verdict.evidence)
        if not verdict.eligible:
            return DecisionReport(
                release_needed=False,
                reasons=(branch_reason,),
                applied_rule=verdict.rule_id,
                signals=signals
            )

        self._check_unique_modules(comparisons)
        reasons = [branch_reason]

        if signals.skip_compare_publications_directive:
            reasons.append(self.explainer.explain(FORCED_RELEASE_STAGE))
            return DecisionReport(
                release_needed=True,
                reasons=reasons,
                applied_rule=FORCED_RELEASE_STAGE,
                signals=signals
            )

        if not comparisons:
            reasons.append(self.explainer.explain(NO_COMPARISONS_STAGE))
            return DecisionReport(
                release_needed=False,
                reasons=reasons,
                applied_rule=NO_COMPARISONS_STAGE,
                signals=signals
            )

        reasons.extend(self.explainer.explain_comparison(c) for c in comparisons)
        return DecisionReport(
            release_needed=any(c.changed for c in comparisons),
            reasons=reasons,
            applied_rule=COMPARE_PUBLICATIONS_STAGE,
            signals=signals
        )

    def _check_unique_modules(self, comparisons: Sequence[ComparisonResult]):
        seen = set()
        duplicates = []
        for comparison in comparisons:
            if not isinstance(comparison, ComparisonResult):
                raise InvalidInputError(f"Expected ComparisonResult, got {comparison!r}")
            if comparison.module_id in seen:
                duplicates.append(comparison.module_id)
            seen.add(comparison.module_id)

        if duplicates:
            raise InvalidInputError(
                f"Duplicate module ids in comparison results: {', '.join(sorted(set(duplicates)))}"
            )
