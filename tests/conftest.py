"""Shared fixtures: a seeded synthetic credit-default dataset."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


def make_credit_frame(n_rows: int = 400, seed: int = 7) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    balance = rng.normal(1000, 450, n_rows).clip(min=0)
    income = rng.normal(35000, 12000, n_rows).clip(min=1000)
    student = rng.random(n_rows) < 0.3
    logit = (balance - 1450) / 120 + 0.4 * student
    defaulted = rng.random(n_rows) < 1 / (1 + np.exp(-logit))
    return pd.DataFrame(
        {
            "Default": np.where(defaulted, "Yes", "No"),
            "Student": np.where(student, "Yes", "No"),
            "Balance": balance.round(2),
            "Income": income.round(2),
        }
    )


@pytest.fixture
def credit_frame() -> pd.DataFrame:
    return make_credit_frame()


@pytest.fixture
def credit_csv(tmp_path: Path, credit_frame: pd.DataFrame) -> Path:
    path = tmp_path / "credit.csv"
    credit_frame.to_csv(path, index=False)
    return path


@pytest.fixture
def prepared_frame() -> pd.DataFrame:
    """Standardised frame as returned by load_dataset."""
    df = make_credit_frame()
    return pd.DataFrame(
        {
            "default": (df["Default"] == "Yes").astype(int),
            "student": df["Student"],
            "balance": df["Balance"],
            "income": df["Income"],
        }
    )
