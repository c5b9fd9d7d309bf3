"""Tests for configuration loading and validation."""

import dataclasses

import pytest

from evointegration.config import DEFAULT_CONFIG, MetricConfig, load_config
from evointegration.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """No project config or EVOINT_* variables leak into these tests."""
    monkeypatch.chdir(tmp_path)
    for field in dataclasses.fields(MetricConfig):
        monkeypatch.delenv(f"EVOINT_{field.name.upper()}", raising=False)


class TestDefaults:
    def test_policy_constants(self):
        assert DEFAULT_CONFIG.high_cohesion_threshold == 0.7
        assert DEFAULT_CONFIG.proxy_primary_weight == 0.6
        assert DEFAULT_CONFIG.proxy_secondary_weight == 0.4
        assert DEFAULT_CONFIG.modularity_offset == 0.5
        assert DEFAULT_CONFIG.modularity_span == 1.5
        assert DEFAULT_CONFIG.module_entropy_epsilon == 1e-10
        assert DEFAULT_CONFIG.prediction_epsilon == 1e-3
        assert DEFAULT_CONFIG.neutral_coherence == 0.5
        assert DEFAULT_CONFIG.initial_threshold == 0.7
        assert DEFAULT_CONFIG.wald_z == 1.96
        assert DEFAULT_CONFIG.spline_spar == 0.5
        assert DEFAULT_CONFIG.curvature_grid_points == 100

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.wald_z = 2.0


class TestValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"high_cohesion_threshold": 1.2},
            {"proxy_primary_weight": 0.7},
            {"modularity_span": 0.0},
            {"prediction_epsilon": 0.0},
            {"wald_z": -1.0},
            {"spline_spar": 2.0},
            {"segmented_max_iter": 0},
            {"curvature_grid_points": 3},
            {"walktrap_steps": 0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(InvalidConfigError):
            MetricConfig(**overrides)

    def test_alternative_weights_summing_to_one(self):
        config = MetricConfig(proxy_primary_weight=0.5, proxy_secondary_weight=0.5)
        assert config.proxy_primary_weight == 0.5


class TestLoadConfig:
    def test_defaults(self):
        assert load_config() == MetricConfig()

    def test_overrides(self):
        config = load_config(high_cohesion_threshold=0.8)
        assert config.high_cohesion_threshold == 0.8

    def test_project_file(self, tmp_path):
        (tmp_path / "evointegration.toml").write_text("wald_z = 2.58\n")
        assert load_config().wald_z == 2.58

    def test_explicit_file_overrides_project(self, tmp_path):
        (tmp_path / "evointegration.toml").write_text("wald_z = 2.58\n")
        explicit = tmp_path / "study.toml"
        explicit.write_text("wald_z = 3.0\n")
        assert load_config(config_file=explicit).wald_z == 3.0

    def test_metrics_table(self, tmp_path):
        path = tmp_path / "study.toml"
        path.write_text("[metrics]\nspline_spar = 0.8\nsegmented_max_iter = 50\n")
        config = load_config(config_file=path)
        assert config.spline_spar == 0.8
        assert config.segmented_max_iter == 50

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("EVOINT_SEGMENTED_MAX_ITER", "60")
        monkeypatch.setenv("EVOINT_INITIAL_THRESHOLD", "0.65")
        config = load_config()
        assert config.segmented_max_iter == 60
        assert config.initial_threshold == 0.65

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("EVOINT_WALD_Z", "2.0")
        assert load_config(wald_z=1.5).wald_z == 1.5

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("EVOINT_WALD_Z", "wide")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(config_file=tmp_path / "absent.toml")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("wald_z = = 2\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError):
            load_config(not_a_setting=1)

    def test_invalid_value_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            load_config(neutral_coherence=2.0)
