"""Metric dispatch.

`Metric` names which kernel to apply. Call sites that only need "compute the
configured metric" go through `Metric.distance` (or `distance` /
`try_distance`) and never name a kernel directly:

    metric = Metric.parse("cosine")
    metric.distance([4, 4], [2, 2])          # ~1.0 (float32)

    result = try_distance("<->", [0, 1], [3, 2, 1])
    result.ok                                # False
    result.error                             # DimensionMismatch(2, 3)
"""

import enum
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from . import kernels
from .errors import DimensionMismatch, UnknownMetricError
from .vector import VectorLike

Kernel = Callable[[VectorLike, VectorLike], float]


class Metric(enum.Enum):
    """Distance metrics, valued by their operator token."""

    SQUARED_EUCLIDEAN = "<->"
    DOT_PRODUCT = "<#>"
    COSINE = "<=>"

    @property
    def token(self) -> str:
        """Operator token used in ranking expressions."""
        return self.value

    @property
    def kernel(self) -> Kernel:
        return _KERNELS[self]

    @property
    def kernel_name(self) -> str:
        return self.kernel.__name__

    def distance(self, left: VectorLike, right: VectorLike) -> float:
        """Apply this metric's kernel.

        Raises:
            DimensionMismatch: If the vectors differ in length
        """
        return _KERNELS[self](left, right)

    @classmethod
    def from_operator(cls, token: str) -> "Metric":
        """Look up a metric by operator token (e.g. "<->")."""
        try:
            return cls(token)
        except ValueError:
            raise UnknownMetricError(f"Unknown operator: {token!r}") from None

    @classmethod
    def parse(cls, name: Union[str, "Metric"]) -> "Metric":
        """Resolve a metric from a token, enum name, kernel name or alias.

        Accepts "<->", "SQUARED_EUCLIDEAN", "squared_euclidean_distance",
        "l2", "dot", "ip", "cosine" and so on, case-insensitively.

        Raises:
            UnknownMetricError: If nothing matches
        """
        if isinstance(name, Metric):
            return name
        if not isinstance(name, str):
            raise UnknownMetricError(f"Unknown metric: {name!r}")

        key = name.strip()
        for metric in cls:
            if key == metric.value:
                return metric

        key = key.lower().replace("-", "_")
        metric = _ALIASES.get(key)
        if metric is None:
            raise UnknownMetricError(
                f"Unknown metric: {name!r} "
                f"(expected one of: {', '.join(sorted(_ALIASES))})"
            )
        return metric


_KERNELS: Dict[Metric, Kernel] = {
    Metric.SQUARED_EUCLIDEAN: kernels.squared_euclidean_distance,
    Metric.DOT_PRODUCT: kernels.dot_product_distance,
    Metric.COSINE: kernels.cosine_distance,
}

_ALIASES: Dict[str, Metric] = {
    "squared_euclidean": Metric.SQUARED_EUCLIDEAN,
    "square_euclidean": Metric.SQUARED_EUCLIDEAN,
    "squared_euclidean_distance": Metric.SQUARED_EUCLIDEAN,
    "euclidean": Metric.SQUARED_EUCLIDEAN,
    "l2": Metric.SQUARED_EUCLIDEAN,
    "dot_product": Metric.DOT_PRODUCT,
    "dot_product_distance": Metric.DOT_PRODUCT,
    "dot": Metric.DOT_PRODUCT,
    "inner_product": Metric.DOT_PRODUCT,
    "ip": Metric.DOT_PRODUCT,
    "cosine": Metric.COSINE,
    "cosine_distance": Metric.COSINE,
    "cos": Metric.COSINE,
}


@dataclass(frozen=True)
class DistanceResult:
    """Outcome of `try_distance`: either a value or a DimensionMismatch."""

    value: Optional[float] = None
    error: Optional[DimensionMismatch] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value


def distance(metric: Union[str, Metric], left: VectorLike, right: VectorLike) -> float:
    """Compute the distance between two vectors under `metric`.

    Args:
        metric: Metric, operator token or metric name
        left: First vector
        right: Second vector

    Raises:
        DimensionMismatch: If the vectors differ in length
        UnknownMetricError: If `metric` is not recognised
    """
    return Metric.parse(metric).distance(left, right)


def try_distance(
    metric: Union[str, Metric], left: VectorLike, right: VectorLike
) -> DistanceResult:
    """Like `distance`, but returns a dimension mismatch as a value.

    Only DimensionMismatch is captured. Unknown metrics and malformed
    vectors still raise.
    """
    metric = Metric.parse(metric)
    try:
        return DistanceResult(value=metric.distance(left, right))
    except DimensionMismatch as e:
        return DistanceResult(error=e)
