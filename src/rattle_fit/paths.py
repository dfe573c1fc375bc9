"""Centralized path management for the fit engine.

All paths should be imported from this module to ensure consistency.
"""
from __future__ import annotations

import os
from pathlib import Path

# Resolve once, reuse everywhere
PACKAGE_DIR = Path(__file__).resolve().parent
POLICY_DIR = PACKAGE_DIR / "policies"
DEFAULT_POLICY_FILE = POLICY_DIR / "fit_policies.yaml"
OUTPUT_DIR = Path(os.getenv("RATTLE_FIT_OUTPUT_DIR", Path.cwd() / "output"))
LOG_DIR = OUTPUT_DIR / "logs"


def resolve_input_path(p: str | Path) -> Path:
    """Resolve a user-supplied path relative to the working directory.

    Args:
        p: Path string or Path object

    Returns:
        Absolute Path object

    Raises:
        ValueError: If path resolves to a directory when a file is expected
    """
    p = Path(p).expanduser()
    resolved = p if p.is_absolute() else (Path.cwd() / p)

    if resolved.exists() and resolved.is_dir():
        raise ValueError(f"Path is a directory, not a file: {resolved}")

    return resolved


def ensure_dirs():
    """Create all required output directories if they don't exist."""
    for d in (OUTPUT_DIR, LOG_DIR):
        d.mkdir(parents=True, exist_ok=True)
