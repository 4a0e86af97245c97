import numpy as np
import pytest

from auc_report.metrics import compute_auc
from auc_report.model import (
    decision_scores,
    load_model,
    predict_labels,
    save_model,
    train_svm,
)
from auc_report.split import split_rows


@pytest.fixture
def split(prepared_frame):
    return split_rows(prepared_frame, "default", seed=1)


def test_train_svm_uses_all_non_outcome_columns(split):
    trained = train_svm(split.train, "default")

    assert trained.feature_columns == ["student", "balance", "income"]
    assert any(name.startswith("cat__student") for name in trained.feature_names)
    assert trained.params["kernel"] == "rbf"
    assert "seed" not in trained.params


def test_predictions_align_with_rows(split):
    trained = train_svm(split.train, "default")
    labels = predict_labels(trained, split.test)
    scores = decision_scores(trained, split.test)

    assert labels.shape == (len(split.test),)
    assert scores.shape == (len(split.test),)
    assert set(np.unique(labels)) <= {0, 1}
    # positive decision values are predicted as the positive class
    assert np.array_equal(labels, (scores > 0).astype(int))


def test_scores_separate_classes(split):
    trained = train_svm(split.train, "default")
    auc = compute_auc(split.test["default"], decision_scores(trained, split.test))
    assert auc > 0.75


def test_linear_kernel_with_selected_features(split):
    trained = train_svm(split.train, "default", kernel="linear", C=0.5, feature_columns=["balance"])
    assert trained.feature_columns == ["balance"]
    assert decision_scores(trained, split.test).shape == (len(split.test),)


def test_train_svm_rejects_single_class(prepared_frame):
    negatives = prepared_frame[prepared_frame["default"] == 0]
    with pytest.raises(ValueError, match="both outcome classes"):
        train_svm(negatives, "default")


def test_train_svm_rejects_unknown_feature(split):
    with pytest.raises(ValueError, match="Missing required feature"):
        train_svm(split.train, "default", feature_columns=["credit_score"])


def test_train_svm_rejects_empty_frame(prepared_frame):
    with pytest.raises(ValueError, match="empty"):
        train_svm(prepared_frame.iloc[0:0], "default")


def test_empty_frame_predicts_nothing(split):
    trained = train_svm(split.train, "default")
    assert predict_labels(trained, split.test.iloc[0:0]).size == 0
    assert decision_scores(trained, split.test.iloc[0:0]).size == 0


def test_save_and_load_model(tmp_path, split):
    trained = train_svm(split.train, "default")
    path = save_model(trained, tmp_path / "bundle.joblib")
    restored = load_model(path)

    np.testing.assert_allclose(
        decision_scores(restored, split.test), decision_scores(trained, split.test)
    )


def test_load_model_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_model(tmp_path / "missing.joblib")
