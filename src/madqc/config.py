"""Define configuration objects for MAD outlier detection.

This module centralizes the thresholding policies used by the detector.
A policy is a tagged variant: :class:`RobustZScore` carries a robust z-score
cutoff, :class:`PercentileCutoff` carries the fraction of a batch to flag.
Keeping the two apart makes the unit of the threshold unambiguous.

All configuration classes are frozen dataclasses, making them hashable and
safe to share across runs.

See Also:
    madqc.detect.mad.MADDetector: Consumes these policies.
    madqc.detect.robust_outliers.apply_mad_config: Consumes MADOutlierConfig.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

# https://en.wikipedia.org/wiki/Median_absolute_deviation#Relation_to_standard_deviation
MAD_TO_ZSCORE_COEFFICIENT = 1.4826

_SCOPES = ("global", "group", "both")


@dataclass(frozen=True)
class RobustZScore:
    """Flag points whose robust z-score exceeds a cutoff.

    Attributes:
        threshold (float): Robust z-score cutoff. A point is an outlier iff its
            score is strictly greater than this value.

    Examples:
        >>> RobustZScore(threshold=3.5)
        RobustZScore(threshold=3.5)
    """
    threshold: float = 3.0


@dataclass(frozen=True)
class PercentileCutoff:
    """Flag a fixed top fraction of a batch, ranked by score.

    Attributes:
        fraction (float): Fraction of the batch in [0, 1] to flag as outliers,
            e.g. 0.01 for the top 1%.

    Notes:
        The number of inliers is ``floor(n - n * fraction)``, so the split is
        subject to ordinary floating-point rounding of ``n * fraction``.

    Examples:
        >>> PercentileCutoff(fraction=0.05)
        PercentileCutoff(fraction=0.05)
    """
    fraction: float = 0.01


ThresholdPolicy = Union[RobustZScore, PercentileCutoff]


def threshold_policy(threshold: float, threshold_is_robust_zscore: bool = True) -> ThresholdPolicy:
    """Map a threshold plus mode flag onto a policy variant.

    Args:
        threshold (float): Robust z-score cutoff, or outlier fraction when
            ``threshold_is_robust_zscore`` is False.
        threshold_is_robust_zscore (bool): Mode selector.

    Returns:
        ThresholdPolicy: ``RobustZScore`` or ``PercentileCutoff``.

    Examples:
        >>> threshold_policy(0.01, threshold_is_robust_zscore=False)
        PercentileCutoff(fraction=0.01)
    """
    if threshold_is_robust_zscore:
        return RobustZScore(threshold=float(threshold))
    return PercentileCutoff(fraction=float(threshold))


@dataclass(frozen=True)
class MADOutlierConfig:
    """Configure MAD-based outlier flagging on a DataFrame column.

    Attributes:
        enabled (bool): Enable detection.
        policy (ThresholdPolicy): Thresholding policy.
        scope (str): One of ``global``, ``group``, or ``both``.

    Examples:
        >>> cfg = MADOutlierConfig(policy=PercentileCutoff(0.1), scope="group")
        >>> cfg.scope
        'group'
    """
    enabled: bool = True
    policy: ThresholdPolicy = field(default_factory=RobustZScore)
    scope: str = "global"  # group/global/both

    def __post_init__(self) -> None:
        if self.scope not in _SCOPES:
            raise ValueError(f"Unknown scope {self.scope!r}; expected one of {_SCOPES}")
        if not isinstance(self.policy, (RobustZScore, PercentileCutoff)):
            raise ValueError(f"Unsupported threshold policy: {type(self.policy).__name__}")
