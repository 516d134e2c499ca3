"""Unit tests for configuration resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from dockwright.config.fields import CONFIG_FIELDS, ConfigField
from dockwright.config.resolver import parse_bool, parse_list, resolve_config
from dockwright.deployment.errors import ConfigurationError


class TestParseBool:
    """Tests for boolean coercion."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "Yes"])
    def test_truthy(self, value: str) -> None:
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["", "false", "no", "0", "garbage", "on"])
    def test_falsy(self, value: str) -> None:
        assert parse_bool(value) is False


class TestParseList:
    """Tests for list coercion."""

    def test_trims_and_drops_empty(self) -> None:
        assert parse_list("a, b ,,c") == ["a", "b", "c"]

    def test_keeps_order_and_duplicates(self) -> None:
        assert parse_list("prod,staging,prod") == ["prod", "staging", "prod"]

    def test_empty_string(self) -> None:
        assert parse_list("") == []


FILE_VALUES: dict[str, Any] = {
    "artifactName": "from-file",
    "helm": {"flavour": "stateful"},
    "docker": {
        "namespace": "file-ns",
        "host": "file.example.com",
        "build": "false",
    },
    "kubernetes": {"config": "/file/kubeconfig", "context": "file-ctx"},
    "env": ["staging"],
    "dry-run": True,
    "auto-approve": "yes",
}

CLI_VALUES = {
    "artifact-name": "from-cli",
    "helm-flavour": "stateless",
    "docker-namespace": "cli-ns",
    "docker-host": "cli.example.com",
    "kubernetes-config": "/cli/kubeconfig",
    "kubernetes-context": "cli-ctx",
    "env": "production",
    "dry-run": "false",
    "docker-build": "true",
    "auto-approve": "false",
}


class TestPrecedence:
    """CLI beats file beats default, per field."""

    @pytest.mark.parametrize("field", CONFIG_FIELDS, ids=lambda f: f.name)
    def test_cli_wins_over_file(self, field: ConfigField) -> None:
        only_cli = {field.flag: CLI_VALUES[field.flag]}
        config = resolve_config(only_cli, FILE_VALUES)
        expected = resolve_config(CLI_VALUES, {})
        assert getattr(config, field.name) == getattr(expected, field.name)

    @pytest.mark.parametrize("field", CONFIG_FIELDS, ids=lambda f: f.name)
    def test_file_wins_over_default(self, field: ConfigField) -> None:
        config = resolve_config({}, FILE_VALUES)
        defaults = resolve_config({}, {})
        assert getattr(config, field.name) != getattr(defaults, field.name)

    def test_defaults_apply_without_cli_or_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        service = tmp_path / "payments"
        service.mkdir()
        monkeypatch.chdir(service)
        monkeypatch.setenv("REGISTRY_HOST", "env.example.com")

        config = resolve_config({}, {})

        assert config.artifact_name == "payments"
        assert config.docker_host == "env.example.com"
        assert config.kubernetes_config == str(Path.home() / ".kube" / "config")
        assert config.kubernetes_context == ""
        assert config.helm_flavour == ""
        assert config.env == ()
        assert config.dry_run is False
        assert config.run_docker_build is True
        assert config.auto_approve is False

    def test_supplied_flag_equal_to_default_still_wins(self) -> None:
        """--docker-build true overrides docker.build: false from the file."""
        config = resolve_config({"docker-build": "true"}, FILE_VALUES)
        assert config.run_docker_build is True

    def test_unsupplied_flag_does_not_shadow_file(self) -> None:
        config = resolve_config({"env": "production"}, FILE_VALUES)
        assert config.run_docker_build is False
        assert config.helm_flavour == "stateful"

    def test_empty_cli_value_overrides_file(self) -> None:
        config = resolve_config({"kubernetes-context": ""}, FILE_VALUES)
        assert config.kubernetes_context == ""


class TestResolveConfig:
    """Tests for the resolved configuration."""

    def test_list_and_bool_coercion(self) -> None:
        config = resolve_config(
            {"env": "staging, production ,,", "dry-run": "YES"}, {}
        )
        assert config.env == ("staging", "production")
        assert config.dry_run is True

    def test_deterministic(self) -> None:
        first = resolve_config(CLI_VALUES, FILE_VALUES)
        second = resolve_config(CLI_VALUES, FILE_VALUES)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_required_fields_not_checked(self) -> None:
        """Missing required values resolve to empty strings; validation reports them."""
        config = resolve_config({"helm-flavour": ""}, {})
        assert config.helm_flavour == ""

    def test_unknown_descriptor_raises(self) -> None:
        bogus = (*CONFIG_FIELDS, ConfigField("not_a_field", "x", "x", "x"))
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config({}, {}, fields=bogus)
        assert "not_a_field" in exc_info.value.message
