"""
Data entities consumed and produced by the decision engine.

All entities are immutable snapshots: comparison results come from the
comparison subsystem, skip signals from the CI environment, and the
report is built once per engine invocation.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidInputError


@dataclass(frozen=True)
class ComparisonResult:
    """One module's verdict on whether its published artifact changed."""
    module_id: str
    changed: bool
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.module_id, str) or not self.module_id.strip():
            raise InvalidInputError(f"Invalid module id: {self.module_id!r}")
        if not isinstance(self.changed, bool):
            raise InvalidInputError(
                f"Module {self.module_id}: 'changed' must be a boolean, got {self.changed!r}"
            )
        if self.description is None:
            object.__setattr__(self, 'description', "")


@dataclass(frozen=True)
class SkipSignals:
    """External signals that can short-circuit the release decision."""
    explicit_skip: bool = False
    skip_release_directive: bool = False
    skip_compare_publications_directive: bool = False
    is_pull_request: bool = False
    branch_name: str = ""

    def __post_init__(self):
        for name in ('explicit_skip', 'skip_release_directive',
                     'skip_compare_publications_directive', 'is_pull_request'):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidInputError(f"Signal '{name}' must be a boolean, got {value!r}")
        if not isinstance(self.branch_name, str):
            raise InvalidInputError(f"Branch name must be a string, got {self.branch_name!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'explicit_skip': self.explicit_skip,
            'skip_release_directive': self.skip_release_directive,
            'skip_compare_publications_directive': self.skip_compare_publications_directive,
            'is_pull_request': self.is_pull_request,
            'branch_name': self.branch_name,
        }


@dataclass(frozen=True)
class DecisionReport:
    """
    Outcome of one engine invocation.

    Reasons are kept in evaluation order and are never empty, so every
    outcome can be explained to whoever reads the CI log.
    """
    release_needed: bool
    reasons: Tuple[str, ...]
    applied_rule: Optional[str] = None
    signals: Optional[SkipSignals] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'reasons', tuple(self.reasons))
        if not self.reasons:
            raise InvalidInputError("Decision report requires at least one reason")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'release_needed': self.release_needed,
            'reasons': list(self.reasons),
            'applied_rule': self.applied_rule,
            'signals': self.signals.to_dict() if self.signals else None,
        }
