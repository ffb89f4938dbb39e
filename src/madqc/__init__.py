"""Classify batches of scalar observations with MAD robust z-scores.

madqc implements a single scoring stage for analysis pipelines: a batch of
one-dimensional observations goes in, and every observation comes back
paired with a robust z-score and marked as an inlier or an outlier.

Key capabilities include:
    - Textbook median and median absolute deviation (MAD) on each batch.
    - Robust z-score thresholding or fixed-fraction (percentile) cutoffs.
    - An explicit zero-MAD policy (0 at the median, ``inf`` elsewhere).
    - A pandas adapter that annotates DataFrame columns, globally or per group.

Most users should start with :class:`madqc.detect.mad.MADDetector`.

See Also:
    madqc.detect.mad.classify_batch: Stateless batch classification.
    madqc.detect.robust_outliers.detect_mad_outliers: DataFrame adapter.
"""

from madqc.config import MADOutlierConfig, PercentileCutoff, RobustZScore, threshold_policy
from madqc.datamodel import BatchResult, Datum, InvalidInputError, ScoredDatum
from madqc.detect.mad import MADDetector, classify_batch

__all__ = [
    "BatchResult",
    "Datum",
    "InvalidInputError",
    "MADDetector",
    "MADOutlierConfig",
    "PercentileCutoff",
    "RobustZScore",
    "ScoredDatum",
    "classify_batch",
    "threshold_policy",
]
