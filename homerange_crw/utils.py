"""Utility functions for homerange-crw.

Run provenance (hashes, git commit) and a simple block timer.
"""

from __future__ import annotations

import hashlib
import subprocess
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Generator, Optional, Union

import yaml

from . import __version__
from .config import RunConfig, config_to_dict


def file_sha256(path: Union[str, Path]) -> str:
    """SHA-256 hex digest of a file."""
    h = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def config_hash(yaml_text: str) -> str:
    """SHA-256 of a YAML config string."""
    return hashlib.sha256(yaml_text.encode('utf-8')).hexdigest()


def get_git_hash() -> str:
    """Return the current git commit hash, or 'unknown' if not in a repo."""
    try:
        result = subprocess.run(
            ['git', 'rev-parse', 'HEAD'],
            capture_output=True, text=True, timeout=5,
        )
        return result.stdout.strip() if result.returncode == 0 else 'unknown'
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return 'unknown'


def run_metadata(
    config: RunConfig,
    parameter_file: Optional[Union[str, Path]],
    n_rows: int,
    n_skipped: int,
) -> Dict[str, Any]:
    """Provenance record written next to the summary table."""
    config_dict = config_to_dict(config)
    return {
        'version': __version__,
        'created_utc': datetime.now(timezone.utc).isoformat(timespec='seconds'),
        'git_hash': get_git_hash(),
        'config_sha256': config_hash(yaml.safe_dump(config_dict, sort_keys=True)),
        'parameter_file': str(parameter_file) if parameter_file else None,
        'parameter_file_sha256': (
            file_sha256(parameter_file) if parameter_file else None
        ),
        'seed': config.simulation.seed,
        'n_steps': config.simulation.n_steps,
        'n_rows': n_rows,
        'n_skipped': n_skipped,
        'config': config_dict,
    }


@contextmanager
def timer(label: str = "") -> Generator[None, None, None]:
    """Simple context-manager timer. Prints elapsed time on exit."""
    start = time.perf_counter()
    yield
    elapsed = time.perf_counter() - start
    if label:
        print(f"[{label}] {elapsed:.3f}s")
    else:
        print(f"Elapsed: {elapsed:.3f}s")
