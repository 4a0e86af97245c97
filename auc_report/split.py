"""Seeded train/test partitioning."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from .utils import get_logger

LOGGER = get_logger("split")

DEFAULT_SEED = 1
DEFAULT_TRAIN_FRACTION = 0.7


@dataclass
class DataSplit:
    train: pd.DataFrame
    test: pd.DataFrame
    mask: np.ndarray
    seed: int
    train_fraction: float

    @property
    def sizes(self) -> dict[str, int]:
        return {"train": len(self.train), "test": len(self.test)}


def train_mask(n_rows: int, train_fraction: float = DEFAULT_TRAIN_FRACTION, seed: int = DEFAULT_SEED) -> np.ndarray:
    """Return one independent coin flip per row: True sends the row to training."""
    if not 0 < train_fraction < 1:
        msg = f"train_fraction must be in (0, 1), got {train_fraction}"
        raise ValueError(msg)
    rng = np.random.default_rng(seed)
    return rng.random(n_rows) < train_fraction


def _check_classes(subset: pd.DataFrame, outcome_column: str, name: str) -> None:
    if subset.empty:
        msg = f"{name} subset is empty; adjust train_fraction or seed"
        raise ValueError(msg)
    present = set(subset[outcome_column].unique().tolist())
    missing = {0, 1} - present
    if missing:
        msg = f"{name} subset lacks outcome class(es) {sorted(missing)}; adjust train_fraction or seed"
        raise ValueError(msg)


def split_rows(
    df: pd.DataFrame,
    outcome_column: str,
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    seed: int = DEFAULT_SEED,
) -> DataSplit:
    """Partition ``df`` into train/test subsets with a seeded per-row coin flip."""
    if outcome_column not in df.columns:
        msg = f"Outcome column '{outcome_column}' not found"
        raise ValueError(msg)

    mask = train_mask(len(df), train_fraction=train_fraction, seed=seed)
    train = df.loc[mask].reset_index(drop=True)
    test = df.loc[~mask].reset_index(drop=True)
    _check_classes(train, outcome_column, "Training")
    _check_classes(test, outcome_column, "Test")

    LOGGER.info(
        "Split %d rows into %d train / %d test (fraction=%.2f, seed=%d)",
        len(df),
        len(train),
        len(test),
        train_fraction,
        seed,
    )
    return DataSplit(train=train, test=test, mask=mask, seed=seed, train_fraction=train_fraction)
