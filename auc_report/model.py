"""Support-vector classifier training utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence

import joblib
import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler
from sklearn.svm import SVC

from .utils import ensure_directory, get_logger

LOGGER = get_logger("model")

DEFAULT_KERNEL = "rbf"
DEFAULT_C = 1.0
DEFAULT_GAMMA = "scale"
DEFAULT_MODEL_PATH = Path("out/model_bundle.joblib")


@dataclass
class TrainedModel:
    model: SVC
    pipeline: ColumnTransformer
    feature_columns: List[str]
    feature_names: List[str]
    params: Dict[str, object] = field(default_factory=dict)


def _resolve_features(
    df: pd.DataFrame,
    outcome_column: str,
    feature_columns: Sequence[str] | None,
) -> List[str]:
    if feature_columns:
        columns = list(feature_columns)
        missing = [col for col in columns if col not in df.columns]
        if missing:
            msg = f"Missing required feature columns: {missing}"
            raise ValueError(msg)
        if outcome_column in columns:
            msg = f"Outcome column '{outcome_column}' cannot also be a feature"
            raise ValueError(msg)
        return columns
    columns = [col for col in df.columns if col != outcome_column]
    if not columns:
        raise ValueError("No feature columns available besides the outcome")
    return columns


def _prepare_target(df: pd.DataFrame, outcome_column: str) -> np.ndarray:
    if outcome_column not in df.columns:
        msg = f"Target column '{outcome_column}' not found"
        raise ValueError(msg)
    return df[outcome_column].astype(int).to_numpy()


def _build_pipeline(df: pd.DataFrame, feature_columns: Sequence[str]) -> ColumnTransformer:
    numeric = [col for col in feature_columns if pd.api.types.is_numeric_dtype(df[col])]
    categorical = [col for col in feature_columns if col not in numeric]

    numeric_pipeline = Pipeline(
        steps=[
            ("imputer", SimpleImputer(strategy="median")),
            ("scaler", StandardScaler()),
        ]
    )
    categorical_pipeline = Pipeline(
        steps=[
            ("imputer", SimpleImputer(strategy="most_frequent")),
            ("onehot", OneHotEncoder(handle_unknown="ignore")),
        ]
    )
    transformers = []
    if numeric:
        transformers.append(("num", numeric_pipeline, numeric))
    if categorical:
        transformers.append(("cat", categorical_pipeline, categorical))
    return ColumnTransformer(transformers=transformers, remainder="drop")


def _as_features(df: pd.DataFrame, feature_columns: Sequence[str]) -> pd.DataFrame:
    missing = [col for col in feature_columns if col not in df.columns]
    if missing:
        msg = f"Missing required feature columns: {missing}"
        raise ValueError(msg)
    features = df[list(feature_columns)].copy()
    for column in features.columns:
        if not pd.api.types.is_numeric_dtype(features[column]):
            features[column] = features[column].astype(object)
    return features


def train_svm(
    df: pd.DataFrame,
    outcome_column: str,
    *,
    kernel: str = DEFAULT_KERNEL,
    C: float = DEFAULT_C,
    gamma: str | float = DEFAULT_GAMMA,
    feature_columns: Sequence[str] | None = None,
) -> TrainedModel:
    """Fit a support-vector classifier on the training subset."""
    if df.empty:
        raise ValueError("Input dataframe is empty")

    columns = _resolve_features(df, outcome_column, feature_columns)
    y = _prepare_target(df, outcome_column)
    if np.unique(y).size < 2:
        raise ValueError("Training data must contain both outcome classes")

    X = _as_features(df, columns)
    pipeline = _build_pipeline(X, columns)
    X_transformed = pipeline.fit_transform(X)

    model = SVC(kernel=kernel, C=C, gamma=gamma)
    model.fit(X_transformed, y)

    try:
        feature_names = pipeline.get_feature_names_out().tolist()
    except AttributeError:
        feature_names = list(columns)

    params = {"kernel": kernel, "C": C, "gamma": gamma}
    LOGGER.info(
        "SVC(kernel=%s, C=%s, gamma=%s) trained on %d records with %d support vectors",
        kernel,
        C,
        gamma,
        len(df),
        int(model.n_support_.sum()),
    )
    return TrainedModel(
        model=model,
        pipeline=pipeline,
        feature_columns=list(columns),
        feature_names=feature_names,
        params=params,
    )


def predict_labels(trained: TrainedModel, df: pd.DataFrame) -> np.ndarray:
    """Return predicted 0/1 labels aligned to rows."""
    if df.empty:
        return np.array([], dtype=int)
    X_transformed = trained.pipeline.transform(_as_features(df, trained.feature_columns))
    return trained.model.predict(X_transformed).astype(int)


def decision_scores(trained: TrainedModel, df: pd.DataFrame) -> np.ndarray:
    """Return signed distances to the separating hyperplane; larger means more positive."""
    if df.empty:
        return np.array([], dtype=float)
    X_transformed = trained.pipeline.transform(_as_features(df, trained.feature_columns))
    return np.asarray(trained.model.decision_function(X_transformed), dtype=float)


def save_model(bundle: TrainedModel, path: Path | str = DEFAULT_MODEL_PATH) -> Path:
    output_path = Path(path)
    ensure_directory(output_path.parent)
    joblib.dump(bundle, output_path)
    LOGGER.info("Model bundle saved to %s", output_path)
    return output_path


def load_model(path: Path | str = DEFAULT_MODEL_PATH) -> TrainedModel:
    model_path = Path(path)
    if not model_path.exists():
        msg = f"Model artifact not found: {model_path}"
        raise FileNotFoundError(msg)
    bundle: TrainedModel = joblib.load(model_path)
    LOGGER.info("Loaded model bundle from %s", model_path)
    return bundle
