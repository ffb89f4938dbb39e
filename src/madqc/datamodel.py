"""Define the records passed into and out of outlier detectors.

Observations are opaque to the detectors: only their single numeric
component is read, and the original object is handed back untouched inside
:class:`ScoredDatum`.

See Also:
    madqc.detect.mad.classify_batch: Produces :class:`BatchResult`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

import numpy as np

from madqc.config import ThresholdPolicy


class InvalidInputError(ValueError):
    """Raised when a batch cannot be classified (empty, or not one-dimensional)."""


@dataclass(frozen=True, eq=False)
class Datum:
    """One observation: a metrics vector plus an opaque payload.

    Attributes:
        metrics (np.ndarray): Numeric components. Detectors in this package
            require exactly one.
        attributes (tuple): Caller-defined payload carried through unchanged.

    Examples:
        >>> Datum([4.2], attributes=("host-a",)).metrics
        array([4.2])
    """
    metrics: np.ndarray
    attributes: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "metrics", np.atleast_1d(np.asarray(self.metrics, dtype=float)))


def scalar_value(obs: Any, index: int = 0) -> float:
    """Return the single numeric component of an observation.

    Accepts objects with a ``metrics`` attribute (such as :class:`Datum`),
    plain real numbers, and length-1 sequences or arrays.

    Args:
        obs (Any): Observation to read.
        index (int): Position of ``obs`` in its batch, used in error messages.

    Returns:
        float: The finite scalar value.

    Raises:
        InvalidInputError: If the observation is not numeric, does not have
            exactly one component, or is not finite.
    """
    raw = getattr(obs, "metrics", obs)
    if isinstance(raw, (str, bytes, bool, np.bool_)) or (
        isinstance(raw, np.ndarray) and raw.dtype == bool
    ):
        raise InvalidInputError(f"Observation {index} is not numeric: {raw!r}")
    if isinstance(raw, Real):
        value = float(raw)
    else:
        try:
            arr = np.asarray(raw, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Observation {index} is not numeric: {raw!r}") from exc
        if arr.size != 1:
            raise InvalidInputError(
                f"Observation {index} has dimension {arr.size}; expected exactly 1"
            )
        value = float(arr.reshape(-1)[0])
    if not np.isfinite(value):
        raise InvalidInputError(f"Observation {index} is not finite: {value!r}")
    return value


@dataclass(frozen=True, eq=False)
class ScoredDatum:
    """An observation paired with its outlier score.

    Attributes:
        datum (Any): The original observation object, identity preserved.
        value (float): Numeric component that was scored.
        score (float): Robust z-score, ``>= 0`` or ``inf``.
    """
    datum: Any
    value: float
    score: float


@dataclass(frozen=True)
class BatchResult:
    """Partition of one batch into inliers and outliers.

    Attributes:
        inliers (tuple[ScoredDatum, ...]): Points classified as inliers.
        outliers (tuple[ScoredDatum, ...]): Points classified as outliers.
        median (float): Batch median used for scoring.
        mad (float): Median absolute deviation used for scoring.
        policy (ThresholdPolicy | None): Policy that produced the split.

    Notes:
        Ordering within ``inliers``/``outliers`` is ascending by value for
        :class:`~madqc.config.RobustZScore` and ascending by score for
        :class:`~madqc.config.PercentileCutoff`.
    """
    inliers: tuple[ScoredDatum, ...]
    outliers: tuple[ScoredDatum, ...]
    median: float
    mad: float
    policy: ThresholdPolicy | None = field(default=None, compare=False)

    def __len__(self) -> int:
        return len(self.inliers) + len(self.outliers)

    def scores(self) -> np.ndarray:
        """Return inlier scores followed by outlier scores."""
        return np.array([s.score for s in (*self.inliers, *self.outliers)], dtype=float)

    def is_consistent_with(self, batch: Sequence[Any]) -> bool:
        """Check that every observation of ``batch`` appears exactly once.

        Observations are matched by identity, so equal-valued but distinct
        objects are counted separately.
        """
        if len(self) != len(batch):
            return False
        expected: dict[int, int] = {}
        for obs in batch:
            expected[id(obs)] = expected.get(id(obs), 0) + 1
        for scored in (*self.inliers, *self.outliers):
            left = expected.get(id(scored.datum), 0)
            if left == 0:
                return False
            expected[id(scored.datum)] = left - 1
        return True
