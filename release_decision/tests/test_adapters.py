"""
Tests for ingestion: comparison results, skip signals and version source.
"""
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from conftest import write_comparison
from decisioning import InvalidInputError
from ingestion import ComparisonResultsAdapter, SignalsProvider, VersionSource


class TestComparisonResultsAdapter:
    """Test loading per-module comparison result files."""

    def test_loads_yaml_and_json_in_filename_order(self, tmp_path):
        write_comparison(tmp_path, "web", False, "identical", fmt='json')
        write_comparison(tmp_path, "core", True, "jar differs")

        adapter = ComparisonResultsAdapter({'path': str(tmp_path)})
        results = adapter.fetch()

        assert [r.module_id for r in results] == ["core", "web"]
        assert results[0].changed is True
        assert results[1].description == "identical"

        health = adapter.get_health()
        assert health.is_healthy
        assert health.records_fetched == 2
        assert health.source_id == "compare_publications"

    def test_missing_directory_yields_empty(self, tmp_path):
        adapter = ComparisonResultsAdapter({'path': str(tmp_path / "missing")})

        assert adapter.fetch() == []
        assert adapter.get_health().records_fetched == 0

    def test_module_id_falls_back_to_file_stem(self, tmp_path):
        (tmp_path / "api.yml").write_text("changed: false\ndescription: same\n")

        results = ComparisonResultsAdapter({'path': str(tmp_path)}).fetch()

        assert results[0].module_id == "api"

    def test_ignores_unrelated_files(self, tmp_path):
        write_comparison(tmp_path, "core", True, "differs")
        (tmp_path / "diff.txt").write_text("binary diff")

        assert len(ComparisonResultsAdapter({'path': str(tmp_path)}).fetch()) == 1

    def test_missing_changed_field(self, tmp_path):
        (tmp_path / "core.yaml").write_text("description: no verdict\n")
        adapter = ComparisonResultsAdapter({'path': str(tmp_path)})

        with pytest.raises(InvalidInputError, match="changed"):
            adapter.fetch()

        assert not adapter.get_health().is_healthy

    def test_malformed_json(self, tmp_path):
        (tmp_path / "core.json").write_text("{not json")

        with pytest.raises(InvalidInputError):
            ComparisonResultsAdapter({'path': str(tmp_path)}).fetch()

    def test_non_mapping_record(self, tmp_path):
        (tmp_path / "core.yaml").write_text("- changed\n")

        with pytest.raises(InvalidInputError, match="mapping"):
            ComparisonResultsAdapter({'path': str(tmp_path)}).fetch()


class TestSignalsProvider:
    """Test reading skip signals from the environment."""

    def test_push_build_on_master(self):
        provider = SignalsProvider(environ={
            'TRAVIS_PULL_REQUEST': 'false',
            'TRAVIS_BRANCH': 'master',
            'TRAVIS_COMMIT_MESSAGE': 'Fix parser',
        })

        signals = provider.read()

        assert signals.branch_name == "master"
        assert not signals.explicit_skip
        assert not signals.is_pull_request
        assert not signals.skip_release_directive
        assert not signals.skip_compare_publications_directive

    def test_skip_release_env_presence_is_enough(self):
        signals = SignalsProvider(environ={'SKIP_RELEASE': ''}).read()

        assert signals.explicit_skip

    @pytest.mark.parametrize("value, expected", [
        ('false', False),
        ('FALSE', False),
        ('', False),
        ('42', True),
        ('true', True),
    ])
    def test_pull_request_detection(self, value, expected):
        signals = SignalsProvider(environ={'TRAVIS_PULL_REQUEST': value}).read()

        assert signals.is_pull_request is expected

    def test_commit_directives(self):
        message = "Bump docs\n\n[ci skip-release] [ci skip-compare-publications]"

        signals = SignalsProvider(environ={}).read(commit_message=message)

        assert signals.skip_release_directive
        assert signals.skip_compare_publications_directive

    def test_explicit_branch_overrides_env(self):
        signals = SignalsProvider(environ={'TRAVIS_BRANCH': 'master'}).read(branch="release/2.x")

        assert signals.branch_name == "release/2.x"

    def test_custom_env_names_and_markers(self):
        provider = SignalsProvider(
            config={
                'branch_env': 'CI_BRANCH',
                'commit_message_env': 'CI_MESSAGE',
                'skip_release_marker': '[no release]',
            },
            environ={'CI_BRANCH': 'main', 'CI_MESSAGE': 'wip [no release]'}
        )

        signals = provider.read()

        assert signals.branch_name == "main"
        assert signals.skip_release_directive


class TestVersionSource:
    """Test current version resolution."""

    def test_reads_properties_file(self, tmp_path):
        path = tmp_path / "version.properties"
        path.write_text("# comment\n! other comment\nversion = 2.3.1\npreviousVersion=2.3.0\n")

        version = VersionSource({'file': str(path)}, environ={}).resolve()

        assert version == "2.3.1"

    def test_continuation_lines_and_escaped_separators(self, tmp_path):
        path = tmp_path / "version.properties"
        path.write_text(
            "release\\=notes=see CHANGELOG\n"
            "version=2.\\\n"
            "    4.0\n"
        )

        source = VersionSource({'file': str(path)}, environ={})

        assert source.resolve() == "2.4.0"
        assert source._parse_properties(path.read_text())["release=notes"] == "see CHANGELOG"

    def test_env_override_wins(self, tmp_path):
        source = VersionSource(
            {'file': str(tmp_path / "missing.properties")},
            environ={'RELEASE_VERSION': '9.9.9'}
        )

        assert source.resolve() == "9.9.9"

    def test_missing_file(self, tmp_path):
        source = VersionSource({'file': str(tmp_path / "missing.properties")}, environ={})

        with pytest.raises(InvalidInputError, match="not found"):
            source.resolve()

    def test_missing_version_entry(self, tmp_path):
        path = tmp_path / "version.properties"
        path.write_text("previousVersion=1.0.0\n")

        with pytest.raises(InvalidInputError, match="No 'version' entry"):
            VersionSource({'file': str(path)}, environ={}).resolve()
