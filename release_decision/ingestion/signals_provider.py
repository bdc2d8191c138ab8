"""
Builds the SkipSignals snapshot for a build from the CI environment.

Branch name and commit message are read from what the CI job already
exposes (or passed explicitly); this module only interprets them.
"""
import logging
import os
from typing import Any, Dict, Mapping, Optional

from decisioning.models import SkipSignals


logger = logging.getLogger(__name__)

DEFAULT_SIGNALS_CONFIG = {
    'skip_release_env': 'SKIP_RELEASE',
    'pull_request_env': 'TRAVIS_PULL_REQUEST',
    'branch_env': 'TRAVIS_BRANCH',
    'commit_message_env': 'TRAVIS_COMMIT_MESSAGE',
    'skip_release_marker': '[ci skip-release]',
    'skip_compare_publications_marker': '[ci skip-compare-publications]',
}


class SignalsProvider:
    """
    Reads skip signals from environment variables.

    - explicit skip: the skip env variable is present (any value)
    - pull request: the PR env variable is set to something other than "false"
    - directives: commit message contains the configured markers
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        self.config = dict(DEFAULT_SIGNALS_CONFIG)
        self.config.update(config or {})
        self.environ = os.environ if environ is None else environ

    def read(
        self,
        branch: Optional[str] = None,
        commit_message: Optional[str] = None
    ) -> SkipSignals:
        """
        Build the signals snapshot.

        Args:
            branch: Branch name overriding the branch env variable
            commit_message: Commit message overriding the commit message env variable
        """
        if branch is None:
            branch = self.environ.get(self.config['branch_env'], '')
        if commit_message is None:
            commit_message = self.environ.get(self.config['commit_message_env'], '')

        signals = SkipSignals(
            explicit_skip=self.config['skip_release_env'] in self.environ,
            skip_release_directive=self.config['skip_release_marker'] in commit_message,
            skip_compare_publications_directive=(
                self.config['skip_compare_publications_marker'] in commit_message
            ),
            is_pull_request=self._is_pull_request(),
            branch_name=branch
        )

        logger.info(f"Build signals: {signals.to_dict()}")
        return signals

    def _is_pull_request(self) -> bool:
        value = self.environ.get(self.config['pull_request_env'], '').strip()
        return value.lower() not in ('', 'false')
