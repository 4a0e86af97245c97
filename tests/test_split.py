import numpy as np
import pandas as pd
import pytest

from auc_report.split import split_rows, train_mask


def test_train_mask_is_reproducible():
    first = train_mask(500, train_fraction=0.7, seed=1)
    second = train_mask(500, train_fraction=0.7, seed=1)
    assert np.array_equal(first, second)
    assert not np.array_equal(first, train_mask(500, train_fraction=0.7, seed=2))


def test_train_mask_share_tracks_fraction():
    mask = train_mask(5000, train_fraction=0.7, seed=3)
    assert mask.dtype == bool
    assert 0.66 < mask.mean() < 0.74


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.2, 1.5])
def test_train_mask_rejects_bad_fraction(fraction):
    with pytest.raises(ValueError, match="train_fraction"):
        train_mask(10, train_fraction=fraction)


def test_split_rows_partitions_every_row(prepared_frame):
    split = split_rows(prepared_frame, "default", train_fraction=0.7, seed=1)

    assert len(split.train) + len(split.test) == len(prepared_frame)
    assert split.sizes == {"train": int(split.mask.sum()), "test": int((~split.mask).sum())}
    assert set(split.train["default"]) == {0, 1}
    assert set(split.test["default"]) == {0, 1}
    pd.testing.assert_frame_equal(
        split.train, prepared_frame.loc[split.mask].reset_index(drop=True)
    )


def test_split_rows_same_seed_same_partition(prepared_frame):
    first = split_rows(prepared_frame, "default", seed=11)
    second = split_rows(prepared_frame, "default", seed=11)
    pd.testing.assert_frame_equal(first.test, second.test)


def test_split_rows_rejects_single_positive_row():
    frame = pd.DataFrame({"default": [1] + [0] * 29, "balance": range(30)})
    with pytest.raises(ValueError, match="subset"):
        split_rows(frame, "default", seed=5)


def test_split_rows_unknown_outcome(prepared_frame):
    with pytest.raises(ValueError, match="not found"):
        split_rows(prepared_frame, "churned")
