"""Command-line entrypoint stitching together the auc_report workflow."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .eda import compute_dataset_summary, make_outcome_plot
from .load import DEFAULT_OUTCOME, load_dataset
from .metrics import Evaluation, evaluate_predictions
from .model import (
    DEFAULT_C,
    DEFAULT_GAMMA,
    DEFAULT_KERNEL,
    decision_scores,
    predict_labels,
    save_model,
    train_svm,
)
from .plots import plot_roc_curve
from .report import write_html_report
from .split import DEFAULT_SEED, DEFAULT_TRAIN_FRACTION, split_rows
from .utils import ensure_directory, get_logger, setup_logging, write_json

LOGGER = get_logger("run")

DEFAULT_TITLE = "SVM Classification Report"


@dataclass
class ReportResult:
    evaluation: Evaluation
    report_path: Path
    roc_path: Path
    metrics_path: Path
    confusion_path: Path
    model_path: Path | None = None


def _gamma(value: str) -> str | float:
    if value in {"scale", "auto"}:
        return value
    try:
        return float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"gamma must be 'scale', 'auto' or a float, got {value!r}") from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fit an SVM on a CSV dataset and report its ROC/AUC")
    parser.add_argument("--data", type=Path, required=True, help="CSV file with the dataset")
    parser.add_argument("--out_dir", type=Path, required=True, help="Directory for outputs")
    parser.add_argument("--outcome", default=DEFAULT_OUTCOME, help="Name of the binary outcome column")
    parser.add_argument(
        "--positive_label",
        default=None,
        help="Outcome value treated as the positive class (defaults to yes/true/1 style indicators)",
    )
    parser.add_argument("--features", nargs="+", default=None, help="Feature columns (default: all but outcome)")
    parser.add_argument(
        "--train_fraction",
        type=float,
        default=DEFAULT_TRAIN_FRACTION,
        help="Probability that a row is assigned to the training subset",
    )
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Random seed for the row split")
    parser.add_argument("--kernel", default=DEFAULT_KERNEL, choices=["linear", "poly", "rbf", "sigmoid"])
    parser.add_argument("--C", dest="C", type=float, default=DEFAULT_C, help="SVM regularisation strength")
    parser.add_argument("--gamma", type=_gamma, default=DEFAULT_GAMMA, help="Kernel coefficient")
    parser.add_argument("--title", default=DEFAULT_TITLE, help="Report title")
    parser.add_argument("--save_model", action="store_true", help="Persist the fitted model bundle")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def run_report(
    data_path: Path,
    out_dir: Path,
    *,
    outcome: str = DEFAULT_OUTCOME,
    positive_label: str | None = None,
    features: Sequence[str] | None = None,
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    seed: int = DEFAULT_SEED,
    kernel: str = DEFAULT_KERNEL,
    C: float = DEFAULT_C,
    gamma: str | float = DEFAULT_GAMMA,
    title: str = DEFAULT_TITLE,
    persist_model: bool = False,
) -> ReportResult:
    out_dir = ensure_directory(out_dir)

    LOGGER.info("Loading dataset from %s", data_path)
    loaded = load_dataset(data_path, outcome_column=outcome, positive_label=positive_label)
    df = loaded.frame
    outcome_column = loaded.outcome_column
    if features:
        column_map = loaded.meta.get("column_map", {})
        features = [column_map.get(name, name) for name in features]

    summary = compute_dataset_summary(df, outcome_column)
    balance_path = make_outcome_plot(df, outcome_column, out_dir)

    split = split_rows(df, outcome_column, train_fraction=train_fraction, seed=seed)

    LOGGER.info("Training support vector classifier")
    trained = train_svm(
        split.train,
        outcome_column,
        kernel=kernel,
        C=C,
        gamma=gamma,
        feature_columns=features,
    )

    LOGGER.info("Scoring %d held-out rows", len(split.test))
    actual = split.test[outcome_column].to_numpy()
    predicted = predict_labels(trained, split.test)
    scores = decision_scores(trained, split.test)
    evaluation = evaluate_predictions(actual, predicted, scores)

    roc = plot_roc_curve(scores, actual, out_dir / "roc_curve.png", title=f"ROC Curve: {outcome_column}")

    confusion_path = out_dir / "confusion_matrix.csv"
    evaluation.confusion.to_csv(confusion_path)
    metrics_path = write_json(
        {
            **evaluation.as_dict(),
            "seed": seed,
            "train_fraction": train_fraction,
            "n_train": len(split.train),
            "source": loaded.source,
        },
        out_dir / "metrics.json",
    )

    model_path = save_model(trained, out_dir / "model_bundle.joblib") if persist_model else None

    params = {**trained.params, "features": ", ".join(trained.feature_columns)}
    report_path = write_html_report(
        out_dir / "report.html",
        title=title,
        source=loaded.source,
        summary=summary,
        split={**split.sizes, "seed": seed, "train_fraction": train_fraction},
        params=params,
        evaluation=evaluation,
        outcome_column=outcome_column,
        roc_chart=roc.path,
        balance_chart=balance_path,
    )
    return ReportResult(
        evaluation=evaluation,
        report_path=report_path,
        roc_path=roc.path,
        metrics_path=metrics_path,
        confusion_path=confusion_path,
        model_path=model_path,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        result = run_report(
            args.data.resolve(),
            args.out_dir.resolve(),
            outcome=args.outcome,
            positive_label=args.positive_label,
            features=args.features,
            train_fraction=args.train_fraction,
            seed=args.seed,
            kernel=args.kernel,
            C=args.C,
            gamma=args.gamma,
            title=args.title,
            persist_model=args.save_model,
        )
    except (FileNotFoundError, ValueError) as exc:
        LOGGER.error("Report generation failed: %s", exc)
        return 1

    evaluation = result.evaluation
    LOGGER.info("Confusion matrix:\n%s", evaluation.confusion.to_string())
    LOGGER.info("AUC %.4f rated %s", evaluation.auc, evaluation.auc_category)
    LOGGER.info("Report complete: %s", result.report_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
