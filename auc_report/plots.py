"""ROC curve rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from sklearn.metrics import roc_auc_score, roc_curve

from .utils import ensure_directory, get_logger

LOGGER = get_logger("plots")

ANNOTATION_POSITION = (0.55, 0.15)


@dataclass
class RocPlot:
    path: Path
    auc: float
    fpr: np.ndarray
    tpr: np.ndarray


def plot_roc_curve(
    scores,
    actual,
    out_path: Path,
    *,
    title: str = "ROC Curve",
) -> RocPlot:
    """Draw the ROC curve for ``scores`` against ``actual`` and save it as a PNG."""
    y_score = np.asarray(scores, dtype=float).ravel()
    y_true = np.asarray(actual).astype(int).ravel()
    if np.unique(y_true).size < 2:
        raise ValueError("ROC curve needs both outcome classes")

    fpr, tpr, _ = roc_curve(y_true, y_score)
    auc = float(roc_auc_score(y_true, y_score))

    fig, ax = plt.subplots(figsize=(7, 6))
    ax.plot(fpr, tpr, color="steelblue", linewidth=2, label="ROC curve")
    ax.fill_between(fpr, tpr, alpha=0.2, color="steelblue")
    ax.plot([0, 1], [0, 1], color="grey", linestyle="--", linewidth=1, label="Chance")
    ax.text(
        *ANNOTATION_POSITION,
        f"AUC = {round(auc, 4)}",
        transform=ax.transAxes,
        fontsize=12,
        bbox={"boxstyle": "round", "facecolor": "white", "alpha": 0.8},
    )
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.02)
    ax.set_xlabel("False positive rate (1 - specificity)")
    ax.set_ylabel("True positive rate (sensitivity)")
    ax.set_title(title)
    ax.legend(loc="lower right")
    fig.tight_layout()

    path = Path(out_path)
    ensure_directory(path.parent)
    fig.savefig(path)
    plt.close(fig)
    LOGGER.info("ROC curve saved to %s", path)
    return RocPlot(path=path, auc=auc, fpr=fpr, tpr=tpr)
