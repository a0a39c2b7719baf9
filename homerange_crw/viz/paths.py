"""Trajectory plots.

plot_path draws one simulated path around the home-range center;
plot_displacement draws its distance-from-center series with the decile
levels overlaid.  Both return a Figure and leave saving to the caller.
"""

from __future__ import annotations

import re
from typing import Optional

import numpy as np

from ..types import DecileSummary, ParameterSet, Path
from .style import (
    DECILE_COLOR,
    END_COLOR,
    ORIGIN_COLOR,
    PATH_COLOR,
    START_COLOR,
    TEXT_COLOR,
    dark_figure,
)


def path_plot_name(params: ParameterSet, suffix: str = '.png') -> str:
    """File name for a dataset's plot, e.g. 'north_winter_d07.png'."""
    parts = [re.sub(r'[^A-Za-z0-9.-]+', '-', str(p)).strip('-') or 'NA'
             for p in params.key]
    return '_'.join(parts) + suffix


def plot_path(path: Path, title: Optional[str] = None):
    """Plot x/y locations with the origin and start/end markers."""
    fig, ax = dark_figure()
    ax.plot(path.x, path.y, color=PATH_COLOR, linewidth=0.6, alpha=0.85)
    ax.scatter([0.0], [0.0], marker='+', s=150, color=ORIGIN_COLOR,
               zorder=3, label='center')
    ax.scatter([path.x[0]], [path.y[0]], s=30, color=START_COLOR,
               zorder=3, label='start')
    ax.scatter([path.x[-1]], [path.y[-1]], s=30, color=END_COLOR,
               zorder=3, label='end')

    ax.set_aspect('equal', adjustable='datalim')
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_title(title or f'Simulated path (N={len(path)})')
    legend = ax.legend(loc='upper right', fontsize=9, facecolor='none')
    for text in legend.get_texts():
        text.set_color(TEXT_COLOR)
    return fig


def plot_displacement(
    path: Path,
    summary: Optional[DecileSummary] = None,
    title: Optional[str] = None,
):
    """Plot displacement by step, with horizontal lines at each quantile."""
    fig, ax = dark_figure(figsize=(10, 5))
    steps = np.arange(1, len(path) + 1)
    ax.plot(steps, path.displacement, color=PATH_COLOR, linewidth=0.6)

    if summary is not None:
        for p, v in zip(summary.probabilities, summary.values):
            ax.axhline(v, color=DECILE_COLOR, linewidth=0.8, alpha=0.6,
                       linestyle='--')
            ax.text(steps[-1], v, f' {100 * p:g}%', color=TEXT_COLOR,
                    fontsize=7, va='center')

    ax.set_xlabel('Step')
    ax.set_ylabel('Distance from center')
    ax.set_title(title or 'Displacement from home-range center')
    return fig
