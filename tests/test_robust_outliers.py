import numpy as np
import pandas as pd
import pytest

from madqc.config import MADOutlierConfig, PercentileCutoff, RobustZScore
from madqc.detect.robust_outliers import apply_mad_config, detect_mad_outliers


def _make_df():
    rng = np.random.default_rng(11)
    a = rng.normal(0.0, 1.0, size=40)
    b = rng.normal(100.0, 1.0, size=40)
    a[5] = 25.0
    b[7] = 60.0
    df = pd.DataFrame(
        {
            "value": np.concatenate([a, b]),
            "group": ["A"] * 40 + ["B"] * 40,
        }
    )
    return df, 5, 40 + 7


def test_detect_mad_outliers_adds_columns():
    df = pd.DataFrame({"value": [1.0, 2.0, 3.0, 4.0, 100.0]})
    out = detect_mad_outliers(df)
    assert out["mad_outlier"].tolist() == [False, False, False, False, True]
    assert out["mad_score"].iloc[2] == 0.0
    assert "mad_score" not in df.columns


def test_detect_mad_outliers_keeps_row_alignment():
    df = pd.DataFrame({"value": [100.0, 3.0, 1.0, 4.0, 2.0]}, index=[10, 11, 12, 13, 14])
    out = detect_mad_outliers(df, prefix="x")
    assert list(out.index) == [10, 11, 12, 13, 14]
    assert bool(out.loc[10, "x_outlier"]) is True
    assert out.loc[11, "x_score"] == 0.0


def test_non_finite_rows_are_not_scored():
    df = pd.DataFrame({"value": [1.0, np.nan, 2.0, "bad", 3.0, np.inf]})
    out = detect_mad_outliers(df)
    assert np.isnan(out["mad_score"].iloc[1])
    assert np.isnan(out["mad_score"].iloc[3])
    assert np.isnan(out["mad_score"].iloc[5])
    assert not out["mad_outlier"].iloc[[1, 3, 5]].any()
    assert np.isfinite(out["mad_score"].iloc[[0, 2, 4]]).all()


def test_missing_column_returns_unflagged():
    df = pd.DataFrame({"other": [1.0, 2.0]})
    out = detect_mad_outliers(df, value_col="value")
    assert not out["mad_outlier"].any()
    assert out["mad_score"].isna().all()


def test_grouped_detection_uses_per_group_scale():
    df, bad_a, bad_b = _make_df()
    glob = detect_mad_outliers(df)
    # Globally the two clusters dominate the scale and hide both spikes.
    assert not glob.loc[[bad_a, bad_b], "mad_outlier"].any()

    grouped = detect_mad_outliers(df, group_col="group")
    assert bool(grouped.loc[bad_a, "mad_outlier"]) is True
    assert bool(grouped.loc[bad_b, "mad_outlier"]) is True


def test_percentile_policy_on_frame():
    df = pd.DataFrame({"value": np.arange(20, dtype=float)})
    out = detect_mad_outliers(df, policy=PercentileCutoff(0.1))
    assert int(out["mad_outlier"].sum()) == 2


def test_apply_mad_config_scopes():
    df, bad_a, bad_b = _make_df()
    out = apply_mad_config(df, MADOutlierConfig(policy=RobustZScore(5.0), scope="both"))
    assert {"mad_global_outlier", "mad_outlier", "mad_any_outlier"}.issubset(out.columns)
    assert bool(out.loc[bad_a, "mad_any_outlier"]) is True

    off = apply_mad_config(df, MADOutlierConfig(enabled=False))
    assert not off["mad_any_outlier"].any()
    assert "mad_global_score" not in off.columns


def test_config_rejects_unknown_scope():
    with pytest.raises(ValueError):
        MADOutlierConfig(scope="backend")


def test_missing_group_key_rows_left_unscored():
    df = pd.DataFrame(
        {
            "value": [1.0, 2.0, 3.0, 4.0, 100.0, 2.5],
            "group": ["a", "a", "a", np.nan, "a", None],
        }
    )
    out = detect_mad_outliers(df, group_col="group")
    assert np.isnan(out["mad_score"].iloc[3])
    assert np.isnan(out["mad_score"].iloc[5])
    assert not out["mad_outlier"].iloc[[3, 5]].any()
    assert bool(out["mad_outlier"].iloc[4]) is True
    assert np.isfinite(out["mad_score"].iloc[[0, 1, 2, 4]]).all()


def test_all_group_keys_missing_returns_unflagged():
    df = pd.DataFrame({"value": [1.0, 2.0, 3.0], "group": [np.nan, np.nan, np.nan]})
    out = detect_mad_outliers(df, group_col="group")
    assert out["mad_score"].isna().all()
    assert not out["mad_outlier"].any()
