"""Distance-dependent turn-angle and step-length models.

FOCUS turn-angle model (wrapped Cauchy):
    mu  = atan2(y, x) + π                                  (homeward bearing)
    rho = rho_inf + (rho0 - rho_inf) · exp(-gamma_rho · d)

  A negative rho (possible when rho0 or rho_inf is fitted below zero) is
  folded onto the opposite bearing: rho → -rho, mu → mu + π.  The sampler
  therefore only ever sees rho >= 0.

Scale-Changing step-length model (Weibull):
    scale = scale_intercept + scale_slope · d
    step  ~ Weibull(shape, scale)

d is the current displacement from the home-range center.  Both models take
it (or the position it comes from) explicitly so each can be exercised with
injected values.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .sampling import sample_wrapped_cauchy, sample_weibull, wrap_angle
from .types import ModelParameterError, ParameterSet


# ═══════════════════════════════════════════════════════════════════════
# FOCUS TURN-ANGLE MODEL
# ═══════════════════════════════════════════════════════════════════════

def focus_concentration(disp: float, params: ParameterSet) -> float:
    """Uncorrected concentration at displacement `disp` (may be negative).

    Raises:
        ModelParameterError: If gamma_rho is negative.
    """
    if params.gamma_rho < 0.0:
        raise ModelParameterError(
            f"gamma_rho must be non-negative, got {params.gamma_rho}"
        )
    return params.rho_inf + (params.rho0 - params.rho_inf) * math.exp(
        -params.gamma_rho * disp
    )


def focus_turn_parameters(
    x: float,
    y: float,
    params: ParameterSet,
) -> Tuple[float, float]:
    """Mean direction and concentration of the next heading from (x, y).

    Returns:
        (mu, rho) with mu in (-π, π] and 0 <= rho < 1.

    Raises:
        ModelParameterError: If the corrected concentration is >= 1.
    """
    mu = math.atan2(y, x) + math.pi
    rho = focus_concentration(math.sqrt(x * x + y * y), params)
    if rho < 0.0:
        rho = -rho
        mu += math.pi
    if not rho < 1.0:
        raise ModelParameterError(
            f"FOCUS concentration {rho:.6g} >= 1 at ({x:.6g}, {y:.6g}) "
            f"(rho0={params.rho0}, rho_inf={params.rho_inf})"
        )
    return wrap_angle(mu), rho


def sample_turn_angle(
    x: float,
    y: float,
    params: ParameterSet,
    rng: np.random.Generator,
) -> float:
    """Heading (radians) of the next step from position (x, y)."""
    mu, rho = focus_turn_parameters(x, y, params)
    return sample_wrapped_cauchy(mu, rho, rng)


# ═══════════════════════════════════════════════════════════════════════
# SCALE-CHANGING STEP-LENGTH MODEL
# ═══════════════════════════════════════════════════════════════════════

def scale_changing_scale(disp: float, params: ParameterSet) -> float:
    """Weibull scale at displacement `disp`."""
    return params.scale_intercept + params.scale_slope * disp


def sample_step_length(
    disp: float,
    params: ParameterSet,
    rng: np.random.Generator,
) -> float:
    """Step length drawn at displacement `disp`.

    Raises:
        ModelParameterError: If the scale at `disp` (or the shape) is not
            positive, e.g. a negative slope carried the path far enough out.
    """
    scale = scale_changing_scale(disp, params)
    if not scale > 0.0:
        raise ModelParameterError(
            f"Weibull scale {scale:.6g} <= 0 at displacement {disp:.6g} "
            f"(scale_intercept={params.scale_intercept}, "
            f"scale_slope={params.scale_slope})"
        )
    return sample_weibull(params.shape, scale, rng)
