"""Common interface for batch outlier detectors."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from madqc.datamodel import BatchResult


class OutlierDetector:
    """Base class for detectors that split a batch into inliers and outliers.

    Subclasses implement :meth:`classify_batch`. Implementations must not
    mutate or reorder ``batch`` and must place every observation in exactly
    one of the returned sequences.
    """

    def classify_batch(self, batch: Sequence[Any]) -> BatchResult:
        raise NotImplementedError(f"{type(self).__name__} does not implement classify_batch")
