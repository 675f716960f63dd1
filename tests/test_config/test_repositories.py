"""Tests for repository list loading and resolution."""

from pathlib import Path

import pytest

from boxupdater.config import (
    Repository,
    assign_display_names,
    find_repository,
    load_repositories,
    parse_repositories,
)
from boxupdater.core.errors import ConfigError


class TestBundledRepositories:
    def test_bundled_list_loads(self):
        repositories = load_repositories()

        names = [repo.name for repo in repositories]
        assert names == ["HayBox", "GP2040-CE", "pico-rectangle", "HayBox-GRAM"]
        assert all(repo.asset_filter == r"\.uf2$" for repo in repositories)

    def test_bundled_entries_have_owners_and_labels(self):
        repositories = load_repositories()

        by_name = {repo.name: repo for repo in repositories}
        assert by_name["GP2040-CE"].owner == "OpenStickCommunity"
        assert by_name["GP2040-CE"].description == "GP2040-CE Firmware"
        assert all(repo.label == repo.name for repo in repositories)


class TestParseRepositories:
    def test_mapping_form(self):
        text = """
repositories:
  - name: fw
    owner: me
    description: Mine
    asset_filter: 'pico.*\\.uf2$'
"""
        (repo,) = parse_repositories(text, "test.yaml")

        assert repo.full_name == "me/fw"
        assert repo.asset_filter == r"pico.*\.uf2$"

    def test_list_form_and_defaults(self):
        (repo,) = parse_repositories("- {name: fw, owner: me}\n", "test.yaml")

        assert repo.description == ""
        assert repo.asset_filter == r"\.uf2$"

    def test_asset_filter_whitespace_is_significant(self):
        repo = Repository(name="fw", owner="me", asset_filter="Pico \\.uf2$ ")

        assert repo.asset_filter == "Pico \\.uf2$ "

    def test_empty_document(self):
        assert parse_repositories("", "empty.yaml") == []

    def test_invalid_yaml(self):
        with pytest.raises(ConfigError, match="Invalid YAML in broken.yaml"):
            parse_repositories("repositories: [unclosed", "broken.yaml")

    def test_missing_owner(self):
        with pytest.raises(ConfigError, match="bad.yaml"):
            parse_repositories("- {name: fw}\n", "bad.yaml")

    def test_empty_name(self):
        with pytest.raises(ConfigError):
            parse_repositories("- {name: '', owner: me}\n", "bad.yaml")


class TestDisplayNames:
    def test_colliding_names_get_owner_suffix(self):
        repos = assign_display_names(
            [
                Repository(name="HayBox", owner="JonnyHaystack"),
                Repository(name="HayBox", owner="someone"),
                Repository(name="GP2040-CE", owner="OpenStickCommunity"),
            ]
        )

        assert [repo.label for repo in repos] == [
            "HayBox (JonnyHaystack)",
            "HayBox (someone)",
            "GP2040-CE",
        ]

    def test_explicit_display_name_is_kept(self):
        (repo,) = assign_display_names(
            [Repository(name="fw", owner="me", display_name="My Firmware")]
        )

        assert repo.label == "My Firmware"


class TestExtraRepositoriesFile:
    def test_extra_file_is_appended(self, tmp_path: Path):
        extra = tmp_path / "repos.yaml"
        extra.write_text(
            "repositories:\n  - {name: HayBox, owner: fork-owner}\n",
            encoding="utf-8",
        )

        repositories = load_repositories(extra)

        assert repositories[-1].owner == "fork-owner"
        labels = [repo.label for repo in repositories]
        assert "HayBox (JonnyHaystack)" in labels
        assert "HayBox (fork-owner)" in labels

    def test_missing_extra_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Cannot read repositories file"):
            load_repositories(tmp_path / "missing.yaml")


class TestFindRepository:
    def test_by_label(self, sample_repositories):
        assert find_repository(sample_repositories, "GP2040-CE").owner == (
            "OpenStickCommunity"
        )

    def test_by_unique_name_when_labels_differ(self):
        repos = assign_display_names(
            [
                Repository(name="HayBox", owner="a"),
                Repository(name="HayBox", owner="b"),
                Repository(name="pico-rectangle", owner="c", display_name="Pico"),
            ]
        )

        assert find_repository(repos, "HayBox (b)").owner == "b"
        assert find_repository(repos, "pico-rectangle").owner == "c"
        # Ambiguous plain name
        assert find_repository(repos, "HayBox") is None

    def test_unknown(self, sample_repositories):
        assert find_repository(sample_repositories, "nope") is None
