"""Core data types for homerange-crw.

This module is the single home for:
  - ParameterSet: one fitted FOCUS / Scale-Changing model instance
  - Position, Path: simulated locations relative to the home-range center
  - DecileSummary, SummaryRow: per-dataset output
  - ModelParameterError, InputDataError

All positions are relative to an implicit origin (the home-range center),
in the same distance units as the fitted step-length parameters.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

import numpy as np


# ═══════════════════════════════════════════════════════════════════════
# ERRORS
# ═══════════════════════════════════════════════════════════════════════

class ModelParameterError(ValueError):
    """A parameter set yields an impossible distribution.

    Raised for a non-positive Weibull shape or scale, or a wrapped Cauchy
    concentration outside [0, 1) after the negative-rho correction.
    """


class InputDataError(ValueError):
    """A parameter record is missing a required field or holds a non-number."""


# ═══════════════════════════════════════════════════════════════════════
# PARAMETERS
# ═══════════════════════════════════════════════════════════════════════

KEY_FIELDS = ('site', 'season', 'individual')
MODEL_FIELDS = (
    'shape',            # Weibull shape (> 0)
    'scale_intercept',  # Weibull scale at distance 0
    'scale_slope',      # Change in Weibull scale per unit distance
    'rho0',             # Concentration at the center
    'rho_inf',          # Concentration far from the center
    'gamma_rho',        # Exponential decay rate of concentration (>= 0)
)


@dataclass(frozen=True)
class ParameterSet:
    """One fitted model instance, identified by (site, season, individual)."""
    site: str
    season: str
    individual: str
    shape: float
    scale_intercept: float
    scale_slope: float
    rho0: float
    rho_inf: float
    gamma_rho: float

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.site, self.season, self.individual)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ParameterSet":
        """Build a ParameterSet from a dict-like row.

        Missing, None, NaN or non-numeric model fields are rejected; nothing
        is defaulted.

        Raises:
            InputDataError: naming the first offending field.
        """
        values = {}
        for name in KEY_FIELDS:
            value = record.get(name)
            if value is None or (isinstance(value, float) and math.isnan(value)):
                raise InputDataError(f"Parameter record is missing '{name}'")
            values[name] = str(value)

        label = '/'.join(values[k] for k in KEY_FIELDS)
        for name in MODEL_FIELDS:
            value = record.get(name)
            if value is None:
                raise InputDataError(f"[{label}] missing required field '{name}'")
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise InputDataError(
                    f"[{label}] field '{name}' is not numeric: {value!r}"
                ) from None
            if not math.isfinite(number):
                raise InputDataError(
                    f"[{label}] field '{name}' is not a finite number: {value!r}"
                )
            values[name] = number
        return cls(**values)


# ═══════════════════════════════════════════════════════════════════════
# POSITIONS AND PATHS
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Position:
    """A point relative to the home-range center."""
    x: float
    y: float

    @property
    def displacement(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)


@dataclass
class Path:
    """A fully materialized simulated trajectory.

    x, y and displacement are parallel float64 arrays of length N.
    initial_heading is the isotropic heading drawn at initialization; the
    base model does not use it for movement.
    """
    x: np.ndarray
    y: np.ndarray
    displacement: np.ndarray
    initial_heading: float = 0.0

    def __len__(self) -> int:
        return len(self.x)

    def position(self, i: int) -> Position:
        return Position(float(self.x[i]), float(self.y[i]))


# ═══════════════════════════════════════════════════════════════════════
# OUTPUT
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DecileSummary:
    """Quantiles of one path's displacement at fixed probabilities."""
    probabilities: Tuple[float, ...]
    values: np.ndarray


@dataclass(frozen=True)
class SummaryRow:
    """One output row: the dataset key plus its displacement deciles."""
    site: str
    season: str
    individual: str
    deciles: DecileSummary

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.site, self.season, self.individual)
