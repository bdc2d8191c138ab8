"""
Shared pytest fixtures for release decision tests.

Provides builders for signals and comparison results, plus a temporary
CI workspace with a config file and a comparison results directory.
"""
import json
import sys
from pathlib import Path

import pytest
import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from decisioning import ComparisonResult, SkipSignals


@pytest.fixture
def releasable_signals():
    """Signals for a plain push build on master with no directives."""
    return SkipSignals(branch_name="master")


@pytest.fixture
def changed_comparisons():
    """Two modules, one of which changed."""
    return [
        ComparisonResult("core", True, "core-1.1.0.jar differs from core-1.0.0.jar"),
        ComparisonResult("api", False, "api publications are identical"),
    ]


@pytest.fixture
def unchanged_comparisons():
    """Two modules with identical publications."""
    return [
        ComparisonResult("core", False, "core publications are identical"),
        ComparisonResult("api", False, "api publications are identical"),
    ]


@pytest.fixture
def ci_env():
    """
    Environment variables used by the test config.

    Names are prefixed so the real CI environment never leaks into tests.
    """
    return {
        'TEST_SKIP_RELEASE': None,
        'TEST_PULL_REQUEST': 'false',
        'TEST_BRANCH': 'master',
        'TEST_COMMIT_MESSAGE': 'Fix parser',
    }


@pytest.fixture
def workspace(tmp_path, monkeypatch, ci_env):
    """
    Temporary CI workspace.

    Yields:
        Dict with 'config' path and 'comparisons' directory; environment
        variables from ci_env are applied (None means unset).
    """
    comparisons_dir = tmp_path / "build" / "comparisons"
    comparisons_dir.mkdir(parents=True)

    (tmp_path / "version.properties").write_text("# release version\nversion=1.4.0\n")

    config = {
        'git': {'releasable_branch_regex': 'master|release/.+'},
        'signals': {
            'skip_release_env': 'TEST_SKIP_RELEASE',
            'pull_request_env': 'TEST_PULL_REQUEST',
            'branch_env': 'TEST_BRANCH',
            'commit_message_env': 'TEST_COMMIT_MESSAGE',
        },
        'comparisons': {'path': str(comparisons_dir)},
        'version': {
            'file': str(tmp_path / "version.properties"),
            'override_env': 'TEST_RELEASE_VERSION',
        },
    }
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(config))

    monkeypatch.delenv('TEST_RELEASE_VERSION', raising=False)
    for name, value in ci_env.items():
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    yield {'config': config_path, 'comparisons': comparisons_dir, 'root': tmp_path}


def write_comparison(directory: Path, module_id: str, changed: bool, description: str, fmt: str = 'yaml'):
    """Write one comparison result file the way the compare step does."""
    record = {'module_id': module_id, 'changed': changed, 'description': description}
    if fmt == 'json':
        path = directory / f"{module_id}.json"
        path.write_text(json.dumps(record))
    else:
        path = directory / f"{module_id}.yaml"
        path.write_text(yaml.safe_dump(record))
    return path
