"""Configuration loading and management for evointegration.

Every fixed policy constant used by the metrics and the threshold
detector lives here as a named, validated field, so studies can run
sensitivity analyses without touching the algorithms. Configuration
sources are merged in priority order:
    1. Defaults (defined in MetricConfig)
    2. Project config (./evointegration.toml)
    3. Explicit config file
    4. Environment variables (EVOINT_* prefix)
    5. Keyword overrides

Example:
    >>> config = load_config(high_cohesion_threshold=0.8)
    >>> config.high_cohesion_threshold
    0.8
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError


@dataclass(frozen=True)
class MetricConfig:
    """Policy constants and tuning parameters.

    Attributes:
        Cohesion Coefficient:
            high_cohesion_threshold: Per-component cohesion above this counts
                as "highly cohesive". Distinct from the reported integration
                threshold (kappa ~ 0.73).

        Proxy estimators (cohesion and coherence):
            proxy_primary_weight: Weight on trait loss / specialization
            proxy_secondary_weight: Weight on functional dependence / role
                differentiation

        Modular Independence:
            modularity_offset: Q offset in M = (Q + offset) / span
            modularity_span: Q span in M = (Q + offset) / span
            module_entropy_epsilon: Guard inside log() for module entropy
            louvain_max_passes: Local-moving passes per Louvain level
            louvain_max_coarsen: Maximum Louvain coarsening levels
            walktrap_steps: Random-walk length for walktrap distances

        Emergent Complexity:
            prediction_epsilon: Substitute for an additive prediction of 0

        Hierarchical Coherence:
            neutral_coherence: H returned when total variance is 0 or undefined

        Threshold detection:
            initial_threshold: Breakpoint seed for segmented regression
            wald_z: Normal quantile for the breakpoint confidence interval
            segmented_max_iter: Iteration cap for breakpoint re-linearisation
            segmented_tol: Relative convergence tolerance on the breakpoint
            segmented_min_points: Observations required on each side of the
                breakpoint
            spline_spar: Smoothing parameter (R smooth.spline convention)
            curvature_grid_points: Grid size for the curvature search
    """

    # === Cohesion Coefficient ===
    high_cohesion_threshold: float = 0.7

    # === Proxy estimators ===
    proxy_primary_weight: float = 0.6
    proxy_secondary_weight: float = 0.4

    # === Modular Independence ===
    # Maps the theoretical Q range [-0.5, 1] onto [0, 1]
    modularity_offset: float = 0.5
    modularity_span: float = 1.5
    module_entropy_epsilon: float = 1e-10
    louvain_max_passes: int = 20
    louvain_max_coarsen: int = 10
    walktrap_steps: int = 4

    # === Emergent Complexity ===
    # Known precision loss for predictions near zero
    prediction_epsilon: float = 1e-3

    # === Hierarchical Coherence ===
    neutral_coherence: float = 0.5

    # === Threshold detection ===
    initial_threshold: float = 0.7
    wald_z: float = 1.96
    segmented_max_iter: int = 30
    segmented_tol: float = 1e-5
    segmented_min_points: int = 2
    spline_spar: float = 0.5
    curvature_grid_points: int = 100

    def __post_init__(self) -> None:
        """Validate configuration."""
        unit_fields = [
            "high_cohesion_threshold",
            "proxy_primary_weight",
            "proxy_secondary_weight",
            "neutral_coherence",
        ]
        for field_name in unit_fields:
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(field_name, value, "must be between 0.0 and 1.0")

        weight_sum = self.proxy_primary_weight + self.proxy_secondary_weight
        if not 0.99 <= weight_sum <= 1.01:
            raise InvalidConfigError(
                "proxy weights", f"{weight_sum:.3f}", "must sum to 1.0"
            )

        if self.modularity_span <= 0:
            raise InvalidConfigError("modularity_span", self.modularity_span, "must be positive")

        positive_floats = [
            "module_entropy_epsilon",
            "prediction_epsilon",
            "wald_z",
            "segmented_tol",
        ]
        for field_name in positive_floats:
            value = getattr(self, field_name)
            if value <= 0:
                raise InvalidConfigError(field_name, value, "must be positive")

        if not 0.0 <= self.spline_spar <= 1.5:
            raise InvalidConfigError("spline_spar", self.spline_spar, "must be in [0, 1.5]")

        if self.louvain_max_passes < 1:
            raise InvalidConfigError("louvain_max_passes", self.louvain_max_passes, "must be at least 1")
        if self.louvain_max_coarsen < 1:
            raise InvalidConfigError("louvain_max_coarsen", self.louvain_max_coarsen, "must be at least 1")
        if self.walktrap_steps < 1:
            raise InvalidConfigError("walktrap_steps", self.walktrap_steps, "must be at least 1")
        if self.segmented_max_iter < 1:
            raise InvalidConfigError("segmented_max_iter", self.segmented_max_iter, "must be at least 1")
        if self.segmented_min_points < 1:
            raise InvalidConfigError(
                "segmented_min_points", self.segmented_min_points, "must be at least 1"
            )
        if self.curvature_grid_points < 4:
            raise InvalidConfigError(
                "curvature_grid_points", self.curvature_grid_points, "must be at least 4"
            )


# Default configuration (singleton)
DEFAULT_CONFIG = MetricConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> MetricConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags or tests)

    Returns:
        Validated MetricConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            value fails validation
    """
    merged: dict = {}

    project_config = Path.cwd() / "evointegration.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())
    merged.update(overrides)

    # [metrics] table is accepted as an alias for top-level keys
    section = merged.pop("metrics", None)
    if isinstance(section, dict):
        merged = {**section, **merged}

    try:
        return MetricConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from EVOINT_* environment variables.

    Every MetricConfig field can be set, e.g. EVOINT_WALD_Z=2.58 or
    EVOINT_SEGMENTED_MAX_ITER=50.

    Returns:
        Dict of field_name -> parsed_value for any EVOINT_* vars found.
    """
    type_hints = get_type_hints(MetricConfig)

    result: dict[str, Any] = {}

    for field_name in MetricConfig.__dataclass_fields__:
        env_key = f"EVOINT_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        try:
            if type_hint is int:
                result[field_name] = int(env_value)
            elif type_hint is float:
                result[field_name] = float(env_value)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML as dict
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
