"""Home-range biased correlated random walk.

One path under a fitted FOCUS / Scale-Changing parameter set:

  Initialization:
    x₁, y₁ ~ Normal(0, initial_sd) independently
    one isotropic heading draw (mu = 0, rho = 0), kept on the Path

  Recurrence, i = 2..N:
    φ    ~ WrappedCauchy(mu(xᵢ₋₁, yᵢ₋₁), rho(dᵢ₋₁))     (FOCUS)
    step ~ Weibull(shape, scale(dᵢ₋₁))                   (Scale-Changing)
    xᵢ = xᵢ₋₁ + step × cos(φ)
    yᵢ = yᵢ₋₁ + step × sin(φ)

Both models read the previous displacement, so steps are strictly
sequential.  Draw order per step is heading, then step length.  A step of
zero is a valid outcome; there is no early termination and no retry.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from .models import sample_step_length, sample_turn_angle
from .sampling import sample_wrapped_cauchy
from .types import ParameterSet, Path, Position

# Reference model defaults
DEFAULT_N_STEPS = 5000
DEFAULT_INITIAL_SD = 100.0


def initial_position(initial_sd: float, rng: np.random.Generator) -> Position:
    """First location: independent zero-mean normals for x and y."""
    if initial_sd < 0:
        raise ValueError(f"initial_sd must be non-negative, got {initial_sd}")
    x = float(rng.normal(0.0, initial_sd))
    y = float(rng.normal(0.0, initial_sd))
    return Position(x, y)


def advance(
    position: Position,
    params: ParameterSet,
    rng: np.random.Generator,
) -> Position:
    """One step of the recurrence: previous position → next position.

    Raises:
        ModelParameterError: If the parameters break down at this position.
    """
    phi = sample_turn_angle(position.x, position.y, params, rng)
    step = sample_step_length(position.displacement, params, rng)
    return Position(
        position.x + step * math.cos(phi),
        position.y + step * math.sin(phi),
    )


def simulate_path(
    params: ParameterSet,
    n_steps: int = DEFAULT_N_STEPS,
    initial_sd: float = DEFAULT_INITIAL_SD,
    rng: Optional[np.random.Generator] = None,
) -> Path:
    """Simulate a full path of `n_steps` locations.

    Args:
        params: Fitted parameter set.
        n_steps: Number of locations N (>= 1), including the initial one.
        initial_sd: Std dev of the initial normal draw (distance units).
        rng: NumPy random generator (required; no global fallback).

    Returns:
        Path with x, y and displacement arrays of length n_steps.

    Raises:
        ModelParameterError: If the parameters yield an invalid distribution
            anywhere along the path.
    """
    if rng is None:
        raise ValueError("simulate_path requires an explicit rng")
    if n_steps < 1:
        raise ValueError(f"n_steps must be >= 1, got {n_steps}")

    x = np.empty(n_steps, dtype=np.float64)
    y = np.empty(n_steps, dtype=np.float64)
    disp = np.empty(n_steps, dtype=np.float64)

    pos = initial_position(initial_sd, rng)
    heading = sample_wrapped_cauchy(0.0, 0.0, rng)
    x[0], y[0], disp[0] = pos.x, pos.y, pos.displacement

    for i in range(1, n_steps):
        pos = advance(pos, params, rng)
        x[i], y[i], disp[i] = pos.x, pos.y, pos.displacement

    return Path(x=x, y=y, displacement=disp, initial_heading=heading)
