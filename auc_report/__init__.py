"""Core package for the auc_report project."""

from .load import LoadedData, coerce_outcome, load_dataset
from .split import DataSplit, split_rows, train_mask
from .model import (
    TrainedModel,
    decision_scores,
    load_model,
    predict_labels,
    save_model,
    train_svm,
)
from .metrics import (
    AUC_CATEGORIES,
    Evaluation,
    categorize_auc,
    compute_auc,
    compute_confusion_matrix,
    evaluate_predictions,
)
from .plots import RocPlot, plot_roc_curve
from .eda import compute_dataset_summary, make_outcome_plot
from .report import render_html_report, write_html_report
from .utils import ensure_directory, get_logger, setup_logging, write_json

__all__ = [
    "LoadedData",
    "DataSplit",
    "TrainedModel",
    "Evaluation",
    "RocPlot",
    "AUC_CATEGORIES",
    "load_dataset",
    "coerce_outcome",
    "split_rows",
    "train_mask",
    "train_svm",
    "predict_labels",
    "decision_scores",
    "save_model",
    "load_model",
    "categorize_auc",
    "compute_auc",
    "compute_confusion_matrix",
    "evaluate_predictions",
    "plot_roc_curve",
    "compute_dataset_summary",
    "make_outcome_plot",
    "render_html_report",
    "write_html_report",
    "ensure_directory",
    "get_logger",
    "setup_logging",
    "write_json",
]
