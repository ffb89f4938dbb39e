"""Provide small statistical utilities without SciPy.

These helpers implement the median, median absolute deviation and robust
z-score used by the detectors. They intentionally avoid SciPy to keep
dependencies minimal.
"""

from __future__ import annotations
import numpy as np

from madqc.config import MAD_TO_ZSCORE_COEFFICIENT


def median_of_sorted(x: np.ndarray) -> float:
    """Return the median of an ascending-sorted, non-empty array.

    Args:
        x: Sorted sample array.

    Returns:
        Mean of the two middle elements for even sizes, the middle element
        for odd sizes.

    Raises:
        ValueError: If ``x`` is empty.

    Examples:
        >>> median_of_sorted(np.array([1.0, 2.0, 3.0, 4.0]))
        2.5
        >>> median_of_sorted(np.array([1.0, 2.0, 3.0, 4.0, 5.0]))
        3.0
    """
    x = np.asarray(x, dtype=float)
    n = len(x)
    if n == 0:
        raise ValueError("median of an empty sample is undefined")
    mid = n // 2
    if n % 2 == 0:
        return float((x[mid - 1] + x[mid]) / 2.0)
    return float(x[mid])


def median_and_mad(x: np.ndarray) -> tuple[float, float]:
    """Return ``(median, MAD)`` of a non-empty sample.

    Args:
        x: Input sample array, in any order.

    Returns:
        Tuple of the sample median and the median absolute deviation about it.

    Notes:
        The MAD is returned unscaled; multiply by
        :data:`~madqc.config.MAD_TO_ZSCORE_COEFFICIENT` for a standard
        deviation estimate.

    Examples:
        >>> median_and_mad(np.array([5.0, 1.0, 3.0, 2.0, 4.0]))
        (3.0, 1.0)
    """
    x = np.sort(np.asarray(x, dtype=float), kind="stable")
    med = median_of_sorted(x)
    resid = np.sort(np.abs(x - med), kind="stable")
    return med, median_of_sorted(resid)


def robust_zscores(x: np.ndarray, median: float, mad: float) -> np.ndarray:
    """Compute ``|x - median| / (1.4826 * mad)``.

    Args:
        x: Input sample array.
        median: Location estimate.
        mad: Unscaled median absolute deviation.

    Returns:
        Non-negative scores aligned with ``x``.

    Notes:
        When ``mad == 0`` the scale is degenerate: points equal to the median
        score 0 and every other point scores ``inf``. No NaN is produced.

    Examples:
        >>> robust_zscores(np.array([5.0, 5.0, 7.0]), 5.0, 0.0)
        array([ 0.,  0., inf])
    """
    resid = np.abs(np.asarray(x, dtype=float) - float(median))
    if mad > 0:
        return resid / (float(mad) * MAD_TO_ZSCORE_COEFFICIENT)
    return np.where(resid == 0.0, 0.0, np.inf)


def robust_scale_mad(x: np.ndarray) -> float:
    """Estimate scale using the median absolute deviation (MAD).

    Args:
        x: Input sample array.

    Returns:
        Robust estimate of standard deviation.

    Notes:
        Uses the standard Gaussian consistency factor (1.4826).

    Examples:
        >>> robust_scale_mad(np.array([0.0, 1.0, 2.0, 100.0])) > 0
        True
    """
    _, mad = median_and_mad(x)
    return MAD_TO_ZSCORE_COEFFICIENT * mad
