"""Displacement deciles of a simulated path.

Quantiles use linear interpolation between order statistics (Hyndman & Fan
type 7, numpy's method="linear", R's default):

    h = (n - 1)·p
    Q(p) = x₍⌊h⌋₎ + (h - ⌊h⌋)·(x₍⌊h⌋+1₎ - x₍⌊h⌋₎)

with x₍ₖ₎ the sorted displacements, 0-indexed.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .types import DecileSummary, Path

DEFAULT_DECILES: Tuple[float, ...] = tuple(round(0.1 * k, 1) for k in range(1, 10))


def check_probabilities(probabilities: Sequence[float]) -> Tuple[float, ...]:
    """Validate quantile probabilities: non-empty, in [0, 1], strictly increasing.

    Raises:
        ValueError: On any violation.
    """
    probs = tuple(float(p) for p in probabilities)
    if len(probs) == 0:
        raise ValueError("probabilities must not be empty")
    if any(not (0.0 <= p <= 1.0) for p in probs):
        raise ValueError(f"probabilities must lie in [0, 1], got {probs}")
    if any(b <= a for a, b in zip(probs, probs[1:])):
        raise ValueError(f"probabilities must be strictly increasing, got {probs}")
    return probs


def displacement_deciles(
    path: Path,
    probabilities: Sequence[float] = DEFAULT_DECILES,
) -> DecileSummary:
    """Quantiles of the path's displacement sequence."""
    probs = check_probabilities(probabilities)
    if len(path) == 0:
        raise ValueError("cannot summarize an empty path")
    values = np.quantile(path.displacement, probs, method='linear')
    return DecileSummary(probabilities=probs, values=np.asarray(values, dtype=np.float64))


def quantile_column_names(probabilities: Sequence[float]) -> list:
    """Output column names, e.g. 0.1 → 'q10', 0.25 → 'q25', 0.975 → 'q97.5'.

    Raises:
        ValueError: If two probabilities map to the same name.
    """
    names = []
    for p in probabilities:
        pct = round(100.0 * float(p), 6)
        names.append(f"q{int(pct)}" if pct == int(pct) else f"q{pct!r}")
    if len(set(names)) != len(names):
        raise ValueError(
            f"probabilities {tuple(probabilities)} give duplicate column names {names}"
        )
    return names
