"""Classify a batch of scalar observations using median/MAD robust z-scores.

Each call sorts a local copy of the batch, computes the median and the
median absolute deviation (MAD), scores every observation as
``|x - median| / (1.4826 * MAD)``, and splits the batch according to a
threshold policy:

- :class:`~madqc.config.RobustZScore`: outlier iff ``score > threshold``.
- :class:`~madqc.config.PercentileCutoff`: the top ``fraction`` of the batch
  by score are outliers.

The computation is stateless; median and MAD are returned with the result.

See Also:
    madqc.utils.stats.median_and_mad: Median/MAD estimator.
    madqc.utils.stats.robust_zscores: Score transform and zero-MAD policy.
    madqc.detect.robust_outliers.detect_mad_outliers: DataFrame adapter.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

import numpy as np

from madqc.config import PercentileCutoff, RobustZScore, ThresholdPolicy, threshold_policy
from madqc.datamodel import BatchResult, InvalidInputError, ScoredDatum, scalar_value
from madqc.detect.base import OutlierDetector
from madqc.utils.logging import debug, warn
from madqc.utils.stats import median_and_mad, robust_zscores


def _percentile_split(n: int, fraction: float) -> int:
    split = math.floor(n - n * fraction)
    return min(max(split, 0), n)


def classify_batch(batch: Sequence[Any], policy: ThresholdPolicy) -> BatchResult:
    """Split ``batch`` into inliers and outliers by MAD robust z-score.

    Args:
        batch (Sequence[Any]): Non-empty sequence of observations, each with
            exactly one numeric component (see
            :func:`madqc.datamodel.scalar_value`). Not modified.
        policy (ThresholdPolicy): ``RobustZScore`` or ``PercentileCutoff``.

    Returns:
        BatchResult: Scored inliers/outliers together with the median and MAD
        used for scoring.

    Raises:
        InvalidInputError: If the batch is empty or any observation is not a
            single finite number.

    Notes:
        The median of an even-sized batch is the mean of the two middle
        values, and of an odd-sized batch the exact middle value. The same
        rule is used for the MAD.

        With ``RobustZScore`` both output sequences are ordered by ascending
        value (ties keep input order). With ``PercentileCutoff`` they are
        ordered by ascending score.

    Examples:
        >>> res = classify_batch([1.0, 2.0, 3.0, 4.0, 100.0], RobustZScore(3.0))
        >>> [s.datum for s in res.outliers]
        [100.0]
        >>> res.median, res.mad
        (3.0, 1.0)
    """
    if not isinstance(policy, (RobustZScore, PercentileCutoff)):
        raise TypeError(f"Unsupported threshold policy: {type(policy).__name__}")

    n = len(batch)
    if n == 0:
        raise InvalidInputError("Cannot classify an empty batch: the median is undefined")

    values = np.array([scalar_value(obs, i) for i, obs in enumerate(batch)], dtype=float)

    order = np.argsort(values, kind="stable")
    med, mad = median_and_mad(values)
    if mad == 0:
        warn(f"MAD is zero for batch of {n}; non-median points score inf")

    sorted_values = values[order]
    scores = robust_zscores(sorted_values, med, mad)
    scored = [
        ScoredDatum(datum=batch[int(i)], value=float(v), score=float(s))
        for i, v, s in zip(order, sorted_values, scores)
    ]

    if isinstance(policy, RobustZScore):
        thresh = float(policy.threshold)
        inliers = tuple(s for s in scored if not s.score > thresh)
        outliers = tuple(s for s in scored if s.score > thresh)
    else:
        split = _percentile_split(n, float(policy.fraction))
        by_score = sorted(scored, key=lambda s: s.score)
        inliers = tuple(by_score[:split])
        outliers = tuple(by_score[split:])

    debug(f"MAD batch: n={n} median={med:.6g} mad={mad:.6g} outliers={len(outliers)}")
    return BatchResult(inliers=inliers, outliers=outliers, median=med, mad=mad, policy=policy)


class MADDetector(OutlierDetector):
    """Median-absolute-deviation outlier detector.

    Args:
        threshold (float): Robust z-score cutoff (e.g. 3.0) when
            ``threshold_is_robust_zscore`` is True; otherwise the fraction of
            the batch to flag (e.g. 0.01 for the top 1%).
        threshold_is_robust_zscore (bool): Mode selector.

    Notes:
        The detector holds only its policy. Per-batch statistics live on the
        returned :class:`~madqc.datamodel.BatchResult`, so one instance can
        be shared freely.

    Examples:
        >>> det = MADDetector(3.0)
        >>> len(det.classify_batch([1.0, 2.0, 3.0]).outliers)
        0
    """

    def __init__(self, threshold: float, threshold_is_robust_zscore: bool = True) -> None:
        self._policy = threshold_policy(threshold, threshold_is_robust_zscore)

    @classmethod
    def from_policy(cls, policy: ThresholdPolicy) -> "MADDetector":
        if isinstance(policy, RobustZScore):
            return cls(policy.threshold, True)
        if isinstance(policy, PercentileCutoff):
            return cls(policy.fraction, False)
        raise TypeError(f"Unsupported threshold policy: {type(policy).__name__}")

    @property
    def policy(self) -> ThresholdPolicy:
        return self._policy

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._policy!r})"

    def classify_batch(self, batch: Sequence[Any]) -> BatchResult:
        return classify_batch(batch, self._policy)

    @staticmethod
    def score(value: float, median: float, mad: float) -> float:
        """Score a single value against precomputed median and MAD."""
        return float(robust_zscores(np.array([value], dtype=float), median, mad)[0])
