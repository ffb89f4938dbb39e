"""Provide detection algorithms for batch outlier classification.

See Also:
    madqc.detect.base.OutlierDetector: Detector interface.
    madqc.detect.mad: MAD robust z-score detector.
    madqc.detect.robust_outliers: DataFrame-column adapter.
"""
