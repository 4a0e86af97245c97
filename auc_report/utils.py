"""Shared utility helpers for the auc_report project."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

import numpy as np

LOGGER_NAME = "auc_report"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure global logging once."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger anchored at LOGGER_NAME."""
    resolved_name = f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME
    return logging.getLogger(resolved_name)


def ensure_directory(path: str | Path) -> Path:
    """Create the directory if needed and return it as a Path."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _to_builtin(value: object) -> object:
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and np.isnan(value):
        return None
    if isinstance(value, Path):
        return str(value)
    return value


def write_json(payload: Mapping[str, object], out_path: Path) -> Path:
    """Write ``payload`` as indented JSON, mapping numpy scalars and NaN to builtins."""
    ensure_directory(Path(out_path).parent)
    clean = {key: _to_builtin(value) for key, value in payload.items()}
    Path(out_path).write_text(json.dumps(clean, indent=2, sort_keys=True) + "\n")
    return Path(out_path)
