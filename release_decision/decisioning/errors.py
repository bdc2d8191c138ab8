"""
Exceptions raised by the release decision layer.
"""


class ReleaseDecisionError(Exception):
    """Base class for release decision failures."""


class InvalidInputError(ReleaseDecisionError, ValueError):
    """Raised for configuration or programmer errors in decision inputs."""


class ReleaseNotNeededError(ReleaseDecisionError):
    """Raised in assert mode when the decision says no release is needed."""

    def __init__(self, report):
        self.report = report
        super().__init__(
            "Release is not needed: " + "; ".join(report.reasons)
        )
