#!/usr/bin/env python3
"""Simulate one FOCUS / Scale-Changing path per fitted dataset and write deciles.

Pipeline:
  parameter CSV → filter → simulate_path → displacement_deciles → deciles.csv

Outputs (under --output, default from config):
  deciles.csv     site, season, individual, q10 .. q90
  metadata.json   seed, hashes, row/skip counts, resolved config
  paths/*.png     one trajectory plot per dataset (with --plots)

Usage:
  python3 scripts/run_deciles.py --params data/fitted_parameters.csv
  python3 scripts/run_deciles.py --config configs/default.yaml \\
      --params data/fitted_parameters.csv --workers 4 --on-error skip --plots
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from homerange_crw.batch import run_from_config
from homerange_crw.config import config_from_overrides, load_config
from homerange_crw.io import read_parameter_sets, write_summary_table
from homerange_crw.types import InputDataError, ModelParameterError
from homerange_crw.utils import run_metadata, timer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Displacement deciles of simulated home-range random walks',
    )
    parser.add_argument('--config', type=Path, default=None,
                        help='Base YAML config (default: built-in defaults)')
    parser.add_argument('--override', type=Path, default=None,
                        help='YAML file merged over the base config')
    parser.add_argument('--params', type=Path, default=None,
                        help='Fitted-parameter CSV (overrides input.parameter_file)')
    parser.add_argument('--output', type=Path, default=None,
                        help='Output directory (overrides output.directory)')
    parser.add_argument('--seed', type=int, default=None, help='Master seed')
    parser.add_argument('--steps', type=int, default=None,
                        help='Locations per path (N)')
    parser.add_argument('--workers', type=int, default=None,
                        help='Parallel worker processes')
    parser.add_argument('--on-error', choices=['halt', 'skip'], default=None,
                        help='What to do when a dataset has invalid parameters')
    parser.add_argument('--plots', action='store_true',
                        help='Write one trajectory PNG per dataset')
    return parser


def _cli_overrides(args: argparse.Namespace) -> dict:
    overrides: dict = {}
    if args.seed is not None:
        overrides.setdefault('simulation', {})['seed'] = args.seed
    if args.steps is not None:
        overrides.setdefault('simulation', {})['n_steps'] = args.steps
    if args.workers is not None:
        overrides.setdefault('batch', {})['workers'] = args.workers
    if args.on_error is not None:
        overrides.setdefault('batch', {})['on_error'] = args.on_error
    if args.params is not None:
        overrides.setdefault('input', {})['parameter_file'] = str(args.params)
    if args.output is not None:
        overrides.setdefault('output', {})['directory'] = str(args.output)
    if args.plots:
        overrides.setdefault('output', {})['plot_paths'] = True
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = _cli_overrides(args)

    try:
        if args.config is not None:
            config = load_config(args.config, args.override, overrides)
        else:
            config = config_from_overrides(overrides)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    if config.input.parameter_file is None:
        print("ERROR: no parameter table given (--params or input.parameter_file)")
        return 1

    out_dir = Path(config.output.directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    try:
        param_sets = read_parameter_sets(
            config.input.parameter_file, config.input.column_map,
        )
    except (InputDataError, FileNotFoundError) as e:
        print(f"ERROR: {e}")
        return 1

    sim = config.simulation
    print(f"Simulating {len(param_sets)} datasets")
    print(f"  N={sim.n_steps}, initial sd={sim.initial_sd}, seed={sim.seed}")
    print(f"  workers={config.batch.workers}, on_error={config.batch.on_error}")

    on_path = None
    if config.output.plot_paths:
        from homerange_crw.summary import displacement_deciles
        from homerange_crw.viz import (
            path_plot_name, plot_displacement, plot_path, save_figure,
        )

        plot_dir = out_dir / 'paths'
        plot_dir.mkdir(parents=True, exist_ok=True)

        def on_path(params, path):
            title = f"{' / '.join(params.key)}  (N={len(path)})"
            save_figure(plot_path(path, title=title),
                        plot_dir / path_plot_name(params), dpi=config.output.dpi)
            deciles = displacement_deciles(path, sim.probabilities)
            save_figure(plot_displacement(path, deciles, title=title),
                        plot_dir / path_plot_name(params, '_displacement.png'),
                        dpi=config.output.dpi)

    try:
        with timer("batch"):
            result = run_from_config(config, param_sets, on_path=on_path)
    except ModelParameterError as e:
        print(f"HALTED: {e}")
        return 1

    summary_path = write_summary_table(
        result.rows, out_dir / config.output.summary_file, sim.probabilities,
    )
    meta = run_metadata(config, config.input.parameter_file,
                        n_rows=len(result.rows), n_skipped=len(result.skipped))
    with open(out_dir / 'metadata.json', 'w') as f:
        json.dump(meta, f, indent=2)

    print(f"\nWrote {len(result.rows)} rows to {summary_path}")
    if result.skipped:
        print(f"Skipped {len(result.skipped)} datasets:")
        for key, message in result.skipped:
            print(f"  {'/'.join(key):<30s} {message}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
