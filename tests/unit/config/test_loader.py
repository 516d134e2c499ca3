"""Unit tests for project config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from dockwright.config.loader import load_project_config, lookup
from dockwright.deployment.errors import ConfigurationError


class TestLoadProjectConfig:
    """Tests for load_project_config."""

    def test_missing_file_returns_empty(self, tmp_path: Path) -> None:
        assert load_project_config(tmp_path / "config.yaml") == {}

    def test_empty_file_returns_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_project_config(path) == {}

    def test_nested_keys_loaded(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("helm:\n  flavour: stateful\nartifactName: orders\n")

        loaded = load_project_config(path)

        assert loaded == {"helm": {"flavour": "stateful"}, "artifactName": "orders"}

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("helm: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_project_config(path)

        assert str(path) in exc_info.value.message

    def test_non_mapping_top_level_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            load_project_config(path)


class TestLookup:
    """Tests for dotted-path lookup."""

    def test_nested_string(self) -> None:
        assert lookup({"helm": {"flavour": "stateless"}}, "helm.flavour") == (
            True,
            "stateless",
        )

    def test_missing_key(self) -> None:
        assert lookup({"helm": {}}, "helm.flavour") == (False, "")

    def test_intermediate_not_mapping(self) -> None:
        assert lookup({"helm": "stateless"}, "helm.flavour") == (False, "")

    def test_null_value_counts_as_unset(self) -> None:
        assert lookup({"docker": {"host": None}}, "docker.host") == (False, "")

    def test_yaml_boolean_rendered_lowercase(self) -> None:
        assert lookup({"docker": {"build": False}}, "docker.build") == (True, "false")
        assert lookup({"dry-run": True}, "dry-run") == (True, "true")

    def test_list_joined_with_commas(self) -> None:
        assert lookup({"env": ["staging", "production"]}, "env") == (
            True,
            "staging,production",
        )

    def test_empty_string_is_found(self) -> None:
        """An explicitly empty value in the file still shadows the default."""
        assert lookup({"docker": {"namespace": ""}}, "docker.namespace") == (True, "")
