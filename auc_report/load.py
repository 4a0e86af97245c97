"""Data loading utilities for the classification dataset."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping

import pandas as pd

from .utils import get_logger

LOGGER = get_logger("load")

DEFAULT_OUTCOME = "default"

_INDICATOR_MAP: Mapping[str, int] = {
    "y": 1,
    "yes": 1,
    "true": 1,
    "t": 1,
    "1": 1,
    "1.0": 1,
    "n": 0,
    "no": 0,
    "false": 0,
    "f": 0,
    "0": 0,
    "0.0": 0,
}

# "2.0" and "2" name the same class
_INTEGER_TEXT = re.compile(r"^(-?\d+)\.0+$")


def _snake_case(name: str) -> str:
    cleaned = re.sub(r"[\s+/]+", "_", str(name).strip())
    cleaned = re.sub(r"[^0-9a-zA-Z_]+", "_", cleaned)
    cleaned = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", cleaned)
    cleaned = re.sub(r"_+", "_", cleaned)
    return cleaned.strip("_").lower()


def _standardize_columns(df: pd.DataFrame) -> tuple[pd.DataFrame, Dict[str, str]]:
    renamed = {col: _snake_case(col) for col in df.columns}
    targets = list(renamed.values())
    duplicate_targets = {val for val in targets if targets.count(val) > 1}
    if duplicate_targets:
        deduped: Dict[str, int] = {}
        for original, target in renamed.items():
            if target in duplicate_targets:
                idx = deduped.get(target, 0)
                deduped[target] = idx + 1
                renamed[original] = f"{target}_{idx}"
    df = df.rename(columns=renamed)
    LOGGER.debug("Standardised columns: %s", list(df.columns))
    return df, {str(k): v for k, v in renamed.items()}


def _coerce_datatypes(df: pd.DataFrame) -> pd.DataFrame:
    for column in list(df.columns):
        series = df[column]
        if pd.api.types.is_object_dtype(series) or pd.api.types.is_string_dtype(series):
            numeric = pd.to_numeric(series, errors="coerce")
            if numeric.notna().sum() and numeric.notna().sum() >= 0.8 * series.notna().sum():
                df[column] = numeric
    LOGGER.debug("Coerced datatypes for %d columns", len(df.columns))
    return df


def coerce_outcome(series: pd.Series, positive_label: str | None = None) -> pd.Series:
    """Map an outcome column onto 0/1, keeping missing values as <NA>.

    With ``positive_label`` every non-missing value equal to it (case-insensitive)
    becomes 1 and everything else 0; a numeric label matches numeric codes by
    value, so "2" selects 2.0. Without it, yes/no style indicators and
    numeric 0/1 are accepted; any other value raises ``ValueError``.
    """
    missing = series.isna()
    text = series.astype(str).str.strip().str.lower()

    if positive_label is not None:
        target = pd.to_numeric(str(positive_label).strip(), errors="coerce")
        if pd.api.types.is_numeric_dtype(series) and not pd.isna(target):
            matches = series == float(target)
        else:
            label = _INTEGER_TEXT.sub(r"\1", str(positive_label).strip().lower())
            matches = text.str.replace(_INTEGER_TEXT, r"\1", regex=True) == label
        coded = matches.astype("Int64")
        coded[missing] = pd.NA
        if coded.dropna().nunique() < 2:
            LOGGER.warning("Positive label %r matched %d of %d rows", positive_label, int(coded.sum()), len(coded))
        return coded

    coded = text.map(_INDICATOR_MAP)
    unknown = sorted(set(text[coded.isna() & ~missing]))
    if unknown:
        preview = ", ".join(unknown[:5])
        msg = f"Outcome column '{series.name}' is not binary; unexpected values: {preview}"
        raise ValueError(msg)
    coded = coded.astype("Int64")
    coded[missing] = pd.NA
    return coded


@dataclass
class LoadedData:
    frame: pd.DataFrame
    outcome_column: str
    source: Path
    meta: Dict[str, object] = field(default_factory=dict)

    @property
    def n_rows(self) -> int:
        return len(self.frame)


def load_dataset(
    path: str | Path,
    outcome_column: str = DEFAULT_OUTCOME,
    positive_label: str | None = None,
) -> LoadedData:
    """Read ``path`` and return the frame with a 0/1 outcome column."""
    csv_path = Path(path)
    if not csv_path.exists():
        msg = f"Data file not found: {csv_path}"
        raise FileNotFoundError(msg)

    LOGGER.info("Reading %s", csv_path.name)
    df = pd.read_csv(csv_path, keep_default_na=True)
    df, column_map = _standardize_columns(df)
    df = _coerce_datatypes(df)

    outcome = _snake_case(outcome_column)
    if outcome not in df.columns:
        msg = f"Outcome column '{outcome_column}' not found; available: {list(df.columns)}"
        raise ValueError(msg)

    df[outcome] = coerce_outcome(df[outcome], positive_label=positive_label)
    missing_outcome = int(df[outcome].isna().sum())
    if missing_outcome:
        LOGGER.warning("Dropping %d rows with a missing outcome", missing_outcome)
        df = df.loc[df[outcome].notna()].reset_index(drop=True)
    df[outcome] = df[outcome].astype(int)

    LOGGER.info("Loaded %d rows x %d columns from %s", len(df), df.shape[1], csv_path.name)
    meta = {
        "column_map": column_map,
        "dropped_missing_outcome": missing_outcome,
        "positive_label": positive_label,
    }
    return LoadedData(frame=df, outcome_column=outcome, source=csv_path, meta=meta)
