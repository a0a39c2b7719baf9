"""Random deviates for the two movement distributions.

Wrapped Cauchy turn angles (inverse-CDF method):
    angle = mu + 2·atan( (1 - rho)/(1 + rho) · tan(π(U - ½)) )
normalized into (-π, π].  rho = 0 gives a uniform angle on the circle,
rho → 1 a point mass at mu.

Weibull step lengths (inverse-CDF method):
    step = scale · (-ln U)^(1/shape)

U is taken as 1 - Generator.random(), i.e. uniform on (0, 1], so the
Weibull log never sees zero.

Both samplers return a Python float when size is None (the per-step path
recurrence) and an ndarray otherwise.
"""

from __future__ import annotations

import math
from typing import Optional, Union

import numpy as np

from .types import ModelParameterError

TWO_PI = 2.0 * np.pi

Angle = Union[float, np.ndarray]


def wrap_angle(theta: Angle) -> Angle:
    """Map angle(s) into (-π, π]."""
    if isinstance(theta, np.ndarray):
        wrapped = np.pi - np.mod(np.pi - theta, TWO_PI)
        # mod can round up to exactly 2π for tiny negative inputs
        return np.where(wrapped <= -np.pi, wrapped + TWO_PI, wrapped)
    wrapped = math.pi - (math.pi - theta) % (2.0 * math.pi)
    if wrapped <= -math.pi:
        wrapped += 2.0 * math.pi
    return wrapped


def _uniform_open_zero(rng: np.random.Generator, size: Optional[int]):
    if size is None:
        return 1.0 - rng.random()
    return 1.0 - rng.random(size)


# ═══════════════════════════════════════════════════════════════════════
# WRAPPED CAUCHY
# ═══════════════════════════════════════════════════════════════════════

def sample_wrapped_cauchy(
    mu: float,
    rho: float,
    rng: np.random.Generator,
    size: Optional[int] = None,
) -> Angle:
    """Draw wrapped-Cauchy angle(s) with mean direction mu, concentration rho.

    Args:
        mu: Mean direction (radians, any range).
        rho: Concentration, 0 <= rho < 1.
        rng: NumPy random generator.
        size: None for a single float, else the number of draws.

    Returns:
        Angle(s) in (-π, π].

    Raises:
        ModelParameterError: If rho is outside [0, 1) or not finite.
    """
    if not (math.isfinite(rho) and 0.0 <= rho < 1.0):
        raise ModelParameterError(
            f"wrapped Cauchy concentration must be in [0, 1), got {rho}"
        )
    u = _uniform_open_zero(rng, size)
    ratio = (1.0 - rho) / (1.0 + rho)
    if size is None:
        return wrap_angle(mu + 2.0 * math.atan(ratio * math.tan(math.pi * (u - 0.5))))
    return wrap_angle(mu + 2.0 * np.arctan(ratio * np.tan(np.pi * (u - 0.5))))


# ═══════════════════════════════════════════════════════════════════════
# WEIBULL
# ═══════════════════════════════════════════════════════════════════════

def sample_weibull(
    shape: float,
    scale: float,
    rng: np.random.Generator,
    size: Optional[int] = None,
) -> Union[float, np.ndarray]:
    """Draw Weibull step length(s).

    Args:
        shape: Weibull shape k > 0.
        scale: Weibull scale λ > 0.
        rng: NumPy random generator.
        size: None for a single float, else the number of draws.

    Returns:
        Non-negative step length(s). Mean is scale·Γ(1 + 1/shape).

    Raises:
        ModelParameterError: If shape or scale is non-positive or not finite.
    """
    if not (math.isfinite(shape) and shape > 0.0):
        raise ModelParameterError(f"Weibull shape must be positive, got {shape}")
    if not (math.isfinite(scale) and scale > 0.0):
        raise ModelParameterError(f"Weibull scale must be positive, got {scale}")
    u = _uniform_open_zero(rng, size)
    if size is None:
        return scale * (-math.log(u)) ** (1.0 / shape)
    return scale * (-np.log(u)) ** (1.0 / shape)
