"""Batch runner: one path + decile summary per fitted parameter set.

For each ParameterSet, in input order:
    simulate_path → displacement_deciles → SummaryRow

Every dataset draws from its own PCG64 stream, spawned from the master
seed by its position in the input (see rng.py), so a batch gives the same
rows whether it runs serially or across a multiprocessing pool.

Error policy for ModelParameterError:
    "halt" — re-raise with the dataset key prepended (default)
    "skip" — warn, record the dataset in BatchResult.skipped, emit no row
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from multiprocessing import Pool
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .config import VALID_ERROR_POLICIES, RunConfig
from .movement import DEFAULT_INITIAL_SD, DEFAULT_N_STEPS, simulate_path
from .rng import (
    create_rng_hierarchy,
    dataset_seed_sequences,
    generator_from_seed_sequence,
    get_dataset_rng,
)
from .summary import DEFAULT_DECILES, check_probabilities, displacement_deciles
from .types import ModelParameterError, ParameterSet, Path, SummaryRow

PathCallback = Callable[[ParameterSet, Path], None]


@dataclass
class BatchResult:
    """Rows in input order, plus datasets dropped under the 'skip' policy."""
    rows: List[SummaryRow] = field(default_factory=list)
    skipped: List[Tuple[Tuple[str, str, str], str]] = field(default_factory=list)


def _label(params: ParameterSet) -> str:
    return '/'.join(params.key)


def run_dataset(
    params: ParameterSet,
    n_steps: int,
    initial_sd: float,
    probabilities: Sequence[float],
    rng: np.random.Generator,
) -> Tuple[Path, SummaryRow]:
    """Simulate and summarize a single dataset.

    Raises:
        ModelParameterError: If the parameters break down along the path.
    """
    path = simulate_path(params, n_steps=n_steps, initial_sd=initial_sd, rng=rng)
    summary = displacement_deciles(path, probabilities)
    row = SummaryRow(
        site=params.site,
        season=params.season,
        individual=params.individual,
        deciles=summary,
    )
    return path, row


def _worker(args):
    """Pool entry point. Returns ('ok', row, path|None) or ('error', message)."""
    params, seq, n_steps, initial_sd, probabilities, keep_path = args
    try:
        path, row = run_dataset(
            params, n_steps, initial_sd, probabilities,
            generator_from_seed_sequence(seq),
        )
    except ModelParameterError as e:
        return ('error', str(e))
    return ('ok', row, path if keep_path else None)


def _record_failure(
    result: BatchResult,
    params: ParameterSet,
    message: str,
    on_error: str,
) -> None:
    if on_error == "halt":
        raise ModelParameterError(f"[{_label(params)}] {message}")
    warnings.warn(
        f"Skipping dataset {_label(params)}: {message}",
        UserWarning,
        stacklevel=3,
    )
    result.skipped.append((params.key, message))


def run_batch(
    param_sets: Sequence[ParameterSet],
    n_steps: int = DEFAULT_N_STEPS,
    initial_sd: float = DEFAULT_INITIAL_SD,
    probabilities: Sequence[float] = DEFAULT_DECILES,
    seed: int = 42,
    on_error: str = "halt",
    workers: int = 1,
    on_path: Optional[PathCallback] = None,
) -> BatchResult:
    """Run every parameter set and collect decile rows in input order.

    Args:
        param_sets: Parameter sets, already filtered by the loader.
        n_steps: Locations per path.
        initial_sd: Std dev of the initial position draw.
        probabilities: Quantile probabilities of the summary.
        seed: Master seed for the per-dataset streams.
        on_error: "halt" or "skip" (see module docstring).
        workers: Number of processes; 1 runs in-process.
        on_path: Optional callback receiving (params, path) for each
            successful dataset, in input order, in this process.

    Returns:
        BatchResult with rows and skipped datasets.

    Raises:
        ModelParameterError: Under "halt", for the first failing dataset.
        ValueError: On invalid arguments.
    """
    if on_error not in VALID_ERROR_POLICIES:
        raise ValueError(
            f"on_error must be one of {sorted(VALID_ERROR_POLICIES)}, got '{on_error}'"
        )
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    probs = check_probabilities(probabilities)
    param_sets = list(param_sets)
    result = BatchResult()
    if not param_sets:
        return result

    if workers == 1 or len(param_sets) == 1:
        rngs = create_rng_hierarchy(seed, len(param_sets))
        for i, params in enumerate(param_sets):
            try:
                path, row = run_dataset(
                    params, n_steps, initial_sd, probs, get_dataset_rng(rngs, i),
                )
            except ModelParameterError as e:
                _record_failure(result, params, str(e), on_error)
                continue
            result.rows.append(row)
            if on_path is not None:
                on_path(params, path)
        return result

    seqs = dataset_seed_sequences(seed, len(param_sets))
    args = [
        (params, seq, n_steps, initial_sd, probs, on_path is not None)
        for params, seq in zip(param_sets, seqs)
    ]
    with Pool(processes=min(workers, len(param_sets))) as pool:
        # imap keeps input order; leaving the block on a halt terminates the pool
        for params, outcome in zip(param_sets, pool.imap(_worker, args)):
            if outcome[0] == 'error':
                _record_failure(result, params, outcome[1], on_error)
                continue
            _, row, path = outcome
            result.rows.append(row)
            if on_path is not None:
                on_path(params, path)
    return result


def run_from_config(
    config: RunConfig,
    param_sets: Sequence[ParameterSet],
    on_path: Optional[PathCallback] = None,
) -> BatchResult:
    """run_batch with every knob taken from a RunConfig."""
    sim = config.simulation
    return run_batch(
        param_sets,
        n_steps=sim.n_steps,
        initial_sd=sim.initial_sd,
        probabilities=sim.probabilities,
        seed=sim.seed,
        on_error=config.batch.on_error,
        workers=config.batch.workers,
        on_path=on_path,
    )
