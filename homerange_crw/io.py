"""Tabular input and output.

Input: a CSV of fitted parameters, one row per (site, season, individual).
Rows without usable concentration parameters, or with a non-positive
Weibull shape, are dropped here so the simulation never sees them.

Output: one row per simulated dataset with the displacement quantiles as
columns q10 .. q90.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from .summary import DEFAULT_DECILES, quantile_column_names
from .types import KEY_FIELDS, MODEL_FIELDS, InputDataError, ParameterSet, SummaryRow

REQUIRED_COLUMNS = KEY_FIELDS + MODEL_FIELDS
CONCENTRATION_COLUMNS = ('rho0', 'rho_inf', 'gamma_rho')


def load_parameter_table(
    path: Union[str, Path],
    column_map: Optional[Dict[str, str]] = None,
) -> pd.DataFrame:
    """Read the fitted-parameter CSV and rename columns to canonical names.

    Args:
        path: CSV file.
        column_map: Source column → canonical name, e.g. {'deer_id': 'individual'}.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        InputDataError: If a required column is absent after renaming.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Parameter table not found: {path}")

    # Read as text so ids like '007' survive; numbers are parsed per row later
    df = pd.read_csv(path, dtype=str)
    if column_map:
        df = df.rename(columns=column_map)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InputDataError(
            f"Parameter table {path} is missing columns: {', '.join(missing)}"
        )
    return df


def filter_parameter_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows the model cannot simulate, keeping input order.

    Removed: any missing concentration parameter, or shape missing / <= 0.
    """
    conc = df[list(CONCENTRATION_COLUMNS)].apply(pd.to_numeric, errors='coerce')
    shape = pd.to_numeric(df['shape'], errors='coerce')
    keep = conc.notna().all(axis=1) & (shape > 0)
    return df.loc[keep].reset_index(drop=True)


def frame_to_parameter_sets(df: pd.DataFrame) -> List[ParameterSet]:
    """Convert table rows to ParameterSets.

    Raises:
        InputDataError: For the first row with a missing or non-numeric field.
    """
    records = df.astype(object).where(df.notna(), None).to_dict(orient='records')
    return [ParameterSet.from_record(r) for r in records]


def read_parameter_sets(
    path: Union[str, Path],
    column_map: Optional[Dict[str, str]] = None,
) -> List[ParameterSet]:
    """Load, filter and convert the parameter table in one call."""
    return frame_to_parameter_sets(
        filter_parameter_frame(load_parameter_table(path, column_map))
    )


def rows_to_frame(
    rows: Sequence[SummaryRow],
    probabilities: Sequence[float] = DEFAULT_DECILES,
) -> pd.DataFrame:
    """Summary rows → DataFrame (site, season, individual, q10 .. q90)."""
    quantile_cols = quantile_column_names(probabilities)
    records = []
    for row in rows:
        if len(row.deciles.values) != len(quantile_cols):
            raise ValueError(
                f"Row {'/'.join(row.key)} has {len(row.deciles.values)} quantiles, "
                f"expected {len(quantile_cols)}"
            )
        record = {'site': row.site, 'season': row.season, 'individual': row.individual}
        record.update(zip(quantile_cols, (float(v) for v in row.deciles.values)))
        records.append(record)
    return pd.DataFrame(records, columns=list(KEY_FIELDS) + quantile_cols)


def write_summary_table(
    rows: Sequence[SummaryRow],
    path: Union[str, Path],
    probabilities: Sequence[float] = DEFAULT_DECILES,
) -> Path:
    """Write summary rows to CSV, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows_to_frame(rows, probabilities).to_csv(path, index=False)
    return path
