"""Unit tests for the DeployConfig model."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from dockwright.config.models import DeployConfig, HelmFlavour
from dockwright.deployment.errors import ConfigurationError


@pytest.fixture
def config() -> DeployConfig:
    return DeployConfig(
        artifact_name="svc",
        helm_flavour="stateless",
        docker_namespace="acme",
        docker_host="reg.example.com",
        env=("staging", "production"),
    )


class TestDerivedValues:
    """Tests for computed image and chart values."""

    def test_image_repository(self, config: DeployConfig) -> None:
        assert config.image_repository == "reg.example.com/acme/svc"

    def test_image_tag(self, config: DeployConfig) -> None:
        assert config.image_tag == "reg.example.com/acme/svc:latest"

    @pytest.mark.parametrize("missing", ["docker_host", "docker_namespace", "artifact_name"])
    def test_image_repository_requires_all_parts(
        self, config: DeployConfig, missing: str
    ) -> None:
        incomplete = config.model_copy(update={missing: ""})
        with pytest.raises(ConfigurationError):
            _ = incomplete.image_repository

    def test_chart_path_default_root(self, config: DeployConfig) -> None:
        assert config.chart_path() == Path("/usr/local/share/dockwright/charts/stateless")

    def test_chart_path_custom_root(self, config: DeployConfig, tmp_path: Path) -> None:
        assert config.chart_path(tmp_path) == tmp_path / "stateless"


class TestImmutability:
    def test_assignment_raises(self, config: DeployConfig) -> None:
        with pytest.raises(pydantic.ValidationError):
            config.helm_flavour = "stateful"  # type: ignore[misc]


class TestSummary:
    def test_rows_render_values(self, config: DeployConfig) -> None:
        rows = dict(config.summary_rows())
        assert rows["env"] == "staging, production"
        assert rows["run_docker_build"] == "true"
        assert rows["dry_run"] == "false"
        assert list(rows)[0] == "artifact_name"


def test_flavour_values() -> None:
    assert HelmFlavour.values() == ("stateless", "stateful")
