"""Exploratory summary of the input dataset."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import matplotlib.pyplot as plt
import pandas as pd

from .utils import ensure_directory, get_logger

LOGGER = get_logger("eda")


def _safe_mean(series: pd.Series) -> float:
    clean = series.dropna()
    return float(clean.mean()) if not clean.empty else float("nan")


def compute_dataset_summary(df: pd.DataFrame, outcome_column: str) -> Dict[str, object]:
    summary: Dict[str, object] = {
        "n_rows": int(len(df)),
        "n_columns": int(df.shape[1]),
    }

    if outcome_column in df.columns:
        outcome = pd.to_numeric(df[outcome_column], errors="coerce")
        counts = outcome.value_counts().reindex([0, 1], fill_value=0)
        summary["class_counts"] = {int(k): int(v) for k, v in counts.items()}
        summary["positive_share"] = _safe_mean(outcome)
    else:
        LOGGER.warning("Outcome column '%s' missing from summary input", outcome_column)
        summary["class_counts"] = {0: 0, 1: 0}
        summary["positive_share"] = float("nan")

    missing = df.isna().sum()
    summary["missing_values"] = {str(k): int(v) for k, v in missing[missing > 0].items()}

    numeric = df.drop(columns=[outcome_column], errors="ignore").select_dtypes(include="number")
    if numeric.empty:
        summary["numeric_describe"] = pd.DataFrame()
    else:
        summary["numeric_describe"] = numeric.describe().T[["mean", "std", "min", "max"]]
    return summary


def make_outcome_plot(df: pd.DataFrame, outcome_column: str, out_dir: Path) -> Path | None:
    ensure_directory(out_dir)
    if df.empty or outcome_column not in df.columns:
        LOGGER.warning("Outcome plot skipped: no data")
        return None

    counts = df[outcome_column].value_counts().reindex([0, 1], fill_value=0)
    fig, ax = plt.subplots(figsize=(5, 4))
    ax.bar(["0 (negative)", "1 (positive)"], counts.to_numpy(), color=["grey", "steelblue"])
    ax.set_title(f"Outcome balance: {outcome_column}")
    ax.set_ylabel("Rows")
    fig.tight_layout()
    path = Path(out_dir) / "outcome_balance.png"
    fig.savefig(path)
    plt.close(fig)
    return path
