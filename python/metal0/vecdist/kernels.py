"""Distance kernels.

Each kernel takes two equal-length vectors and returns a float32 scalar
(as a Python float). Kernels are pure: no shared state, no logging, no
mutation of their inputs, so they can be cached and run from any number of
threads at once.

    >>> squared_euclidean_distance([0, 1], [3, 2])
    10.0
    >>> dot_product_distance([5, 1], [1, 2])
    7.0
    >>> round(cosine_distance([4, 4], [2, 2]), 6)
    1.0
"""

import numpy as np

from .vector import VectorLike, as_operands


def squared_euclidean_distance(left: VectorLike, right: VectorLike) -> float:
    """Square Euclidean distance. Try this one if you don't have any special requirements.

    Computes sum((left[i] - right[i]) ** 2).

    Raises:
        DimensionMismatch: If the vectors differ in length
    """
    left, right = as_operands(left, right)
    with np.errstate(over="ignore", invalid="ignore"):
        diff = left - right
        return float(np.dot(diff, diff))


def dot_product_distance(left: VectorLike, right: VectorLike) -> float:
    """Dot product distance.

    Computes sum(left[i] * right[i]). The sign is left as is; ranking
    direction is up to the caller.

    Raises:
        DimensionMismatch: If the vectors differ in length
    """
    left, right = as_operands(left, right)
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.dot(left, right))


def cosine_distance(left: VectorLike, right: VectorLike) -> float:
    """Cosine distance. Similar to Euclidean distance but with a normalization.

    Use this if your vectors are not normalized. Computes
    dot(left, right) / (norm(left) * norm(right)).

    A zero-norm operand is not an error: the result is NaN (0 / 0) or
    +/-inf, exactly as IEEE division gives it.

    Raises:
        DimensionMismatch: If the vectors differ in length
    """
    left, right = as_operands(left, right)
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        dot = np.dot(left, right)
        norm_left = np.sqrt(np.dot(left, left))
        norm_right = np.sqrt(np.dot(right, right))
        return float(dot / (norm_left * norm_right))
