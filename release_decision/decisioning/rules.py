"""
Rule definitions for branch releasability.

Each rule inspects the skip signals of a build and returns a verdict
if the rule conditions are met, or None if the rule doesn't apply.
The chain is evaluated in priority order and the first verdict wins.
"""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import InvalidInputError
from .explainer import DecisionExplainer
from .models import SkipSignals


BranchPattern = Union[str, re.Pattern]


@dataclass(frozen=True)
class Verdict:
    """Result of applying a releasability rule to a build."""
    eligible: bool
    rule_id: str
    reason_code: str
    evidence: Dict[str, Any] = field(default_factory=dict)


def compile_branch_pattern(branch_pattern: BranchPattern) -> re.Pattern:
    """
    Compile the releasable branch expression.

    Raises:
        InvalidInputError: If the pattern is missing or malformed
    """
    if isinstance(branch_pattern, re.Pattern):
        return branch_pattern
    if not isinstance(branch_pattern, str):
        raise InvalidInputError(f"Branch pattern must be a string, got {branch_pattern!r}")
    try:
        return re.compile(branch_pattern)
    except re.error as e:
        raise InvalidInputError(f"Malformed branch pattern {branch_pattern!r}: {e}") from e


class Rule(ABC):
    """Base class for all releasability rules."""

    def __init__(self, rule_id: str, priority: int, reason_code: str):
        self.rule_id = rule_id
        self.priority = priority
        self.reason_code = reason_code

    @abstractmethod
    def evaluate(self, signals: SkipSignals, branch_pattern: re.Pattern) -> Optional[Verdict]:
        """
        Evaluate the rule against the build signals.

        Returns Verdict if rule applies, None otherwise.
        """
        pass

    def _verdict(self, eligible: bool, **evidence) -> Verdict:
        return Verdict(
            eligible=eligible,
            rule_id=self.rule_id,
            reason_code=self.reason_code,
            evidence=evidence
        )


class ExplicitSkipRule(Rule):
    """R0: SKIP_RELEASE was set in the environment."""

    def __init__(self):
        super().__init__("R0", 0, "EXPLICIT_SKIP")

    def evaluate(self, signals: SkipSignals, branch_pattern: re.Pattern) -> Optional[Verdict]:
        if signals.explicit_skip:
            return self._verdict(False, explicit_skip=True)
        return None


class PullRequestRule(Rule):
    """R1: pull request builds never release."""

    def __init__(self):
        super().__init__("R1", 1, "PULL_REQUEST")

    def evaluate(self, signals: SkipSignals, branch_pattern: re.Pattern) -> Optional[Verdict]:
        if signals.is_pull_request:
            return self._verdict(False, is_pull_request=True)
        return None


class SkipReleaseDirectiveRule(Rule):
    """R2: commit message carries the skip-release marker."""

    def __init__(self):
        super().__init__("R2", 2, "SKIP_RELEASE")

    def evaluate(self, signals: SkipSignals, branch_pattern: re.Pattern) -> Optional[Verdict]:
        if signals.skip_release_directive:
            return self._verdict(False, skip_release_directive=True)
        return None


class BranchNotReleasableRule(Rule):
    """R3: branch name does not fully match the releasable pattern."""

    def __init__(self):
        super().__init__("R3", 3, "BRANCH_NOT_RELEASABLE")

    def evaluate(self, signals: SkipSignals, branch_pattern: re.Pattern) -> Optional[Verdict]:
        branch = signals.branch_name or ""
        if branch_pattern.fullmatch(branch) is None:
            return self._verdict(
                False,
                branch_name=branch,
                branch_pattern=branch_pattern.pattern
            )
        return None


class BranchReleasableRule(Rule):
    """R4: Default rule - the branch is eligible for release."""

    def __init__(self):
        super().__init__("R4", 4, "BRANCH_RELEASABLE")

    def evaluate(self, signals: SkipSignals, branch_pattern: re.Pattern) -> Optional[Verdict]:
        # Fallback rule - always applies
        return self._verdict(
            True,
            branch_name=signals.branch_name,
            branch_pattern=branch_pattern.pattern
        )


def get_default_rules() -> List[Rule]:
    """
    Get the default rule chain in priority order.

    Rules are evaluated in order (lowest priority number first).
    First rule that matches determines whether the branch is releasable.
    """
    return [
        ExplicitSkipRule(),          # R0: SKIP_RELEASE env variable
        PullRequestRule(),           # R1: PR build
        SkipReleaseDirectiveRule(),  # R2: [ci skip-release]
        BranchNotReleasableRule(),   # R3: branch outside the pattern
        BranchReleasableRule(),      # R4: fallback, always matches
    ]


class ReleasabilityRule:
    """
    Decides whether the current branch may produce a release at all,
    independently of any artifact comparison.
    """

    def __init__(
        self,
        rules: Optional[List[Rule]] = None,
        explainer: Optional[DecisionExplainer] = None
    ):
        self.rules = sorted(rules or get_default_rules(), key=lambda r: r.priority)
        self.explainer = explainer or DecisionExplainer()

    def check(self, signals: SkipSignals, branch_pattern: BranchPattern) -> Verdict:
        """
        Apply the rule chain and return the first matching verdict.

        Raises:
            InvalidInputError: If the branch pattern is malformed or no rule matched
        """
        pattern = compile_branch_pattern(branch_pattern)
        for rule in self.rules:
            verdict = rule.evaluate(signals, pattern)
            if verdict is not None:
                return verdict

        raise InvalidInputError("No releasability rule matched; the chain needs a fallback rule")

    def evaluate(self, signals: SkipSignals, branch_pattern: BranchPattern) -> Tuple[bool, str]:
        """
        Returns:
            Tuple of (eligible, reason)
        """
        verdict = self.check(signals, branch_pattern)
        return verdict.eligible, self.explainer.explain(verdict.reason_code, verdict.evidence)
