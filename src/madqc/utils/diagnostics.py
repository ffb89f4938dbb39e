"""Provide diagnostics helpers for detector outputs.

Summaries are printed in a human-readable form. Plotting is intentionally
kept out of this module to keep dependencies minimal.

See Also:
    madqc.utils.logging: Logging helpers used for summaries.
    madqc.detect.mad.classify_batch: Produces the results consumed here.
"""

from __future__ import annotations
import numpy as np
import pandas as pd

from madqc.datamodel import BatchResult
from madqc.utils.logging import info, warn
from madqc.utils.stats import robust_scale_mad


def batch_table(result: BatchResult) -> pd.DataFrame:
    """Flatten a batch result into one row per observation.

    Args:
        result (BatchResult): Output of a detector call.

    Returns:
        pandas.DataFrame: Columns ``value``, ``score`` and ``outlier``; inliers
        first, each part in the order the detector returned it.

    Examples:
        >>> from madqc.detect.mad import MADDetector
        >>> batch_table(MADDetector(3.0).classify_batch([1.0, 2.0, 3.0])).shape
        (3, 3)
    """
    rows = [(s.value, s.score, False) for s in result.inliers]
    rows += [(s.value, s.score, True) for s in result.outliers]
    return pd.DataFrame(rows, columns=["value", "score", "outlier"])


def summarize_batch(result: BatchResult, top: int = 10) -> None:
    """Print a compact summary of one classified batch.

    Args:
        result (BatchResult): Output of a detector call.
        top (int): Number of highest-scoring outliers to list.

    Notes:
        This function prints via :mod:`madqc.utils.logging`.
    """
    info(f"Observations: {len(result)}")
    info(f"Median: {result.median:.6g}  MAD: {result.mad:.6g}")
    tab = batch_table(result)
    sigma = robust_scale_mad(tab["value"].to_numpy())
    info(f"Robust sigma (1.4826 * MAD): {sigma:.6g}")
    info(f"Inliers: {len(result.inliers)}  Outliers: {len(result.outliers)}")

    if result.mad == 0:
        warn("Degenerate scale (MAD = 0): every point off the median scores inf")

    if result.outliers:
        worst = tab[tab["outlier"]].sort_values("score", ascending=False, kind="stable")
        n_inf = int(np.isinf(worst["score"]).sum())
        if n_inf:
            info(f"Outliers with infinite score: {n_inf}")
        info(f"Top {min(top, len(worst))} outliers:")
        info(worst.head(top).to_string(index=False))
