"""Confusion matrix, AUC and the qualitative AUC scale."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix, roc_auc_score

from .utils import get_logger

LOGGER = get_logger("metrics")

NO_DISCRIMINATION = "No discrimination"
POOR = "Poor"
ACCEPTABLE = "Acceptable"
EXCELLENT = "Excellent"
OUTSTANDING = "Outstanding"

AUC_CATEGORIES = (NO_DISCRIMINATION, POOR, ACCEPTABLE, EXCELLENT, OUTSTANDING)

_LABELS = (0, 1)


@dataclass
class Evaluation:
    confusion: pd.DataFrame
    accuracy: float
    sensitivity: float
    specificity: float
    auc: float
    auc_category: str
    n_test: int

    def as_dict(self) -> Dict[str, object]:
        counts = self.confusion.to_numpy()
        return {
            "accuracy": self.accuracy,
            "sensitivity": self.sensitivity,
            "specificity": self.specificity,
            "auc": self.auc,
            "auc_category": self.auc_category,
            "n_test": self.n_test,
            "true_negative": int(counts[0, 0]),
            "false_positive": int(counts[0, 1]),
            "false_negative": int(counts[1, 0]),
            "true_positive": int(counts[1, 1]),
        }


def categorize_auc(score: float) -> str:
    """Map an AUC onto the five-tier scale.

    0.5 is "No discrimination", (0.5, 0.7] "Poor", (0.7, 0.8] "Acceptable",
    (0.8, 0.9] "Excellent" and anything above 0.9 "Outstanding". Scores
    below 0.5 are no better than chance and share the lowest label.
    """
    value = float(score)
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        msg = f"AUC must lie in [0, 1], got {score!r}"
        raise ValueError(msg)
    if value > 0.9:
        return OUTSTANDING
    if value > 0.8:
        return EXCELLENT
    if value > 0.7:
        return ACCEPTABLE
    if value > 0.5:
        return POOR
    return NO_DISCRIMINATION


def _as_labels(values) -> np.ndarray:
    return np.asarray(values).astype(int).ravel()


def compute_confusion_matrix(actual, predicted) -> pd.DataFrame:
    """Return a 2x2 table with actual classes as rows and predictions as columns."""
    y_true = _as_labels(actual)
    y_pred = _as_labels(predicted)
    if y_true.shape != y_pred.shape:
        msg = f"Length mismatch: {len(y_true)} actual vs {len(y_pred)} predicted"
        raise ValueError(msg)
    matrix = confusion_matrix(y_true, y_pred, labels=list(_LABELS))
    return pd.DataFrame(
        matrix,
        index=[f"actual_{label}" for label in _LABELS],
        columns=[f"predicted_{label}" for label in _LABELS],
    )


def compute_auc(actual, scores) -> float:
    """Area under the ROC curve for binary ``actual`` labels and continuous ``scores``."""
    y_true = _as_labels(actual)
    y_score = np.asarray(scores, dtype=float).ravel()
    if y_true.shape != y_score.shape:
        msg = f"Length mismatch: {len(y_true)} labels vs {len(y_score)} scores"
        raise ValueError(msg)
    if np.unique(y_true).size < 2:
        raise ValueError("AUC is undefined when only one class is present")
    return float(roc_auc_score(y_true, y_score))


def _safe_rate(numerator: int, denominator: int) -> float:
    return float(numerator / denominator) if denominator else float("nan")


def evaluate_predictions(actual, predicted, scores) -> Evaluation:
    """Summarise held-out predictions: confusion matrix, rates and AUC."""
    confusion = compute_confusion_matrix(actual, predicted)
    tn, fp, fn, tp = (int(v) for v in confusion.to_numpy().ravel())

    auc = compute_auc(actual, scores)
    evaluation = Evaluation(
        confusion=confusion,
        accuracy=float(accuracy_score(_as_labels(actual), _as_labels(predicted))),
        sensitivity=_safe_rate(tp, tp + fn),
        specificity=_safe_rate(tn, tn + fp),
        auc=auc,
        auc_category=categorize_auc(auc),
        n_test=int(tn + fp + fn + tp),
    )
    LOGGER.info(
        "Accuracy %.4f, sensitivity %.4f, specificity %.4f, AUC %.4f (%s)",
        evaluation.accuracy,
        evaluation.sensitivity,
        evaluation.specificity,
        evaluation.auc,
        evaluation.auc_category,
    )
    return evaluation
