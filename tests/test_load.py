import logging
from pathlib import Path

import pandas as pd
import pytest

from auc_report.load import coerce_outcome, load_dataset


def _write(tmp_path: Path, frame: pd.DataFrame, name: str = "data.csv") -> Path:
    path = tmp_path / name
    frame.to_csv(path, index=False)
    return path


def test_load_dataset_standardises_columns_and_outcome(credit_csv):
    loaded = load_dataset(credit_csv, outcome_column="Default")

    assert loaded.outcome_column == "default"
    assert list(loaded.frame.columns) == ["default", "student", "balance", "income"]
    assert set(loaded.frame["default"].unique()) <= {0, 1}
    assert loaded.frame["default"].dtype.kind == "i"
    assert loaded.meta["column_map"]["Balance"] == "balance"
    assert loaded.n_rows == 400


def test_load_dataset_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dataset(tmp_path / "nope.csv")


def test_load_dataset_missing_outcome_column(credit_csv):
    with pytest.raises(ValueError, match="not found"):
        load_dataset(credit_csv, outcome_column="churned")


def test_load_dataset_rejects_non_binary_outcome(tmp_path):
    path = _write(tmp_path, pd.DataFrame({"grade": ["a", "b", "c"], "x": [1, 2, 3]}))
    with pytest.raises(ValueError, match="not binary"):
        load_dataset(path, outcome_column="grade")


def test_load_dataset_positive_label(tmp_path):
    frame = pd.DataFrame({"Label": ["spam", "ham", "SPAM", "ham"], "Length": [10, 20, 30, 40]})
    loaded = load_dataset(_write(tmp_path, frame), outcome_column="Label", positive_label="spam")
    assert loaded.frame["label"].tolist() == [1, 0, 1, 0]


def test_load_dataset_drops_missing_outcome(tmp_path):
    frame = pd.DataFrame({"default": ["Yes", None, "No", "No"], "balance": [1.0, 2.0, 3.0, 4.0]})
    loaded = load_dataset(_write(tmp_path, frame))
    assert loaded.frame["default"].tolist() == [1, 0, 0]
    assert loaded.meta["dropped_missing_outcome"] == 1


def test_load_dataset_coerces_numeric_text(tmp_path):
    frame = pd.DataFrame(
        {"default": [0, 1, 0, 1, 0], "Monthly Spend": ["1.5", "2.0", "3.25", "4", "unknown"]}
    )
    loaded = load_dataset(_write(tmp_path, frame))
    assert "monthly_spend" in loaded.frame.columns
    assert pd.api.types.is_numeric_dtype(loaded.frame["monthly_spend"])
    assert loaded.frame["monthly_spend"].isna().sum() == 1


def test_coerce_outcome_numeric_indicators():
    coded = coerce_outcome(pd.Series([0, 1, 1.0, 0.0], name="y"))
    assert coded.tolist() == [0, 1, 1, 0]


def test_coerce_outcome_boolean_text():
    coded = coerce_outcome(pd.Series(["TRUE", "false", "t"], name="y"))
    assert coded.tolist() == [1, 0, 1]


def test_load_dataset_numeric_positive_label_with_missing_codes(tmp_path):
    # a missing code makes pandas read the column as float64
    frame = pd.DataFrame({"status": [2, 1, None, 2, 1], "age": [30, 41, 52, 63, 74]})
    loaded = load_dataset(_write(tmp_path, frame), outcome_column="status", positive_label="2")
    assert loaded.frame["status"].tolist() == [1, 0, 1, 0]
    assert loaded.meta["dropped_missing_outcome"] == 1


def test_coerce_outcome_integer_text_matches_float_text():
    coded = coerce_outcome(pd.Series(["2.0", "1", "2"], name="y"), positive_label="2")
    assert coded.tolist() == [1, 0, 1]


def test_coerce_outcome_float_label_against_int_codes():
    coded = coerce_outcome(pd.Series([3, 4, 3], name="y"), positive_label="3.0")
    assert coded.tolist() == [1, 0, 1]


def test_positive_label_matching_no_rows_warns(caplog):
    series = pd.Series(["spam", "ham", "ham"], name="label")
    with caplog.at_level(logging.WARNING, logger="auc_report.load"):
        coded = coerce_outcome(series, positive_label="eggs")
    assert coded.tolist() == [0, 0, 0]
    assert "matched 0 of 3 rows" in caplog.text


def test_positive_label_matching_every_row_warns(caplog):
    series = pd.Series(["spam", "SPAM"], name="label")
    with caplog.at_level(logging.WARNING, logger="auc_report.load"):
        coded = coerce_outcome(series, positive_label="spam")
    assert coded.tolist() == [1, 1]
    assert "matched 2 of 2 rows" in caplog.text
