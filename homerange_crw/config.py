"""Configuration system for homerange-crw.

Hierarchical YAML configuration with deep-merge support:
  base.yaml → override file → command-line / sweep overrides

Sections map 1:1 to YAML top-level keys; unknown keys are ignored.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .summary import DEFAULT_DECILES, check_probabilities, quantile_column_names


# ═══════════════════════════════════════════════════════════════════════
# CONFIGURATION DATACLASSES
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class SimulationSection:
    """Path generation and summary."""
    n_steps: int = 5000            # Locations per path (N)
    initial_sd: float = 100.0      # Std dev of initial x, y (distance units)
    seed: int = 42                 # Master seed; per-dataset streams spawn from it
    probabilities: List[float] = field(
        default_factory=lambda: list(DEFAULT_DECILES)
    )


@dataclass
class BatchSection:
    """Batch control.

    on_error: "halt" — first ModelParameterError aborts the batch
              "skip" — offending dataset gets no output row, batch continues
    """
    on_error: str = "halt"
    workers: int = 1               # >1 runs datasets in a multiprocessing pool


@dataclass
class InputSection:
    """Fitted-parameter table."""
    parameter_file: Optional[str] = None
    column_map: Dict[str, str] = field(default_factory=dict)  # source → canonical name


@dataclass
class OutputSection:
    """Output control."""
    directory: str = "results/"
    summary_file: str = "deciles.csv"
    plot_paths: bool = False       # One PNG per dataset under <directory>/paths/
    dpi: int = 150


@dataclass
class RunConfig:
    """Complete run configuration.

    Load from YAML via `load_config()`.
    """
    simulation: SimulationSection = field(default_factory=SimulationSection)
    batch: BatchSection = field(default_factory=BatchSection)
    input: InputSection = field(default_factory=InputSection)
    output: OutputSection = field(default_factory=OutputSection)


# ═══════════════════════════════════════════════════════════════════════
# YAML LOADING & MERGING
# ═══════════════════════════════════════════════════════════════════════

SECTION_MAP = {
    'simulation': SimulationSection,
    'batch': BatchSection,
    'input': InputSection,
    'output': OutputSection,
}

VALID_ERROR_POLICIES = {"halt", "skip"}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into base. Modifies base in place.

    - Dict values are merged recursively
    - Non-dict values are replaced
    - Keys in override but not base are added
    """
    for key, value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _dict_to_section(section_cls, data: Dict) -> Any:
    """Convert a dict to a dataclass, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(section_cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return section_cls(**filtered)


def _yaml_to_config(data: Dict) -> RunConfig:
    sections = {}
    for key, cls in SECTION_MAP.items():
        if key in data and isinstance(data[key], dict):
            sections[key] = _dict_to_section(cls, data[key])
        else:
            sections[key] = cls()
    return RunConfig(**sections)


def config_to_dict(config: RunConfig) -> Dict[str, Any]:
    """Plain-dict form of a config (YAML/JSON serializable)."""
    return dataclasses.asdict(config)


def validate_config(config: RunConfig) -> None:
    """Validate configuration constraints. Raises ValueError on failure."""
    sim = config.simulation
    if sim.n_steps < 1:
        raise ValueError(f"simulation.n_steps must be >= 1, got {sim.n_steps}")
    if sim.initial_sd < 0:
        raise ValueError(
            f"simulation.initial_sd must be non-negative, got {sim.initial_sd}"
        )
    if sim.seed < 0:
        raise ValueError("simulation.seed must be non-negative")
    try:
        check_probabilities(sim.probabilities)
        quantile_column_names(sim.probabilities)
    except ValueError as e:
        raise ValueError(f"simulation.probabilities: {e}") from None

    if config.batch.on_error not in VALID_ERROR_POLICIES:
        raise ValueError(
            f"batch.on_error must be one of {sorted(VALID_ERROR_POLICIES)}, "
            f"got '{config.batch.on_error}'"
        )
    if config.batch.workers < 1:
        raise ValueError(f"batch.workers must be >= 1, got {config.batch.workers}")

    if not isinstance(config.input.column_map, dict):
        raise ValueError("input.column_map must be a mapping")

    if config.output.dpi < 1:
        raise ValueError(f"output.dpi must be >= 1, got {config.output.dpi}")


def load_config(
    base_path: Union[str, Path],
    override_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict] = None,
) -> RunConfig:
    """Load and merge hierarchical YAML configuration.

    Merge order: base → override file → overrides dict.

    Raises:
        FileNotFoundError: If base_path (or a given override_path) doesn't exist.
        ValueError: If validation fails.
    """
    base_path = Path(base_path)
    if not base_path.exists():
        raise FileNotFoundError(f"Config file not found: {base_path}")

    with open(base_path) as f:
        config_dict = yaml.safe_load(f) or {}

    if override_path is not None:
        override_path = Path(override_path)
        if not override_path.exists():
            raise FileNotFoundError(f"Override config not found: {override_path}")
        with open(override_path) as f:
            deep_merge(config_dict, yaml.safe_load(f) or {})

    if overrides is not None:
        deep_merge(config_dict, overrides)

    config = _yaml_to_config(config_dict)
    validate_config(config)
    return config


def default_config() -> RunConfig:
    """Return a RunConfig with all default values."""
    config = RunConfig()
    validate_config(config)
    return config


def config_from_overrides(overrides: Optional[Dict] = None) -> RunConfig:
    """Defaults with a nested overrides dict merged on top, validated."""
    config_dict = config_to_dict(RunConfig())
    if overrides:
        deep_merge(config_dict, overrides)
    config = _yaml_to_config(config_dict)
    validate_config(config)
    return config
