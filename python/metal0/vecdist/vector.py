"""Vector coercion and the shared dimension check.

Every kernel reads its operands through `as_vector` and then calls
`validate_dimensions` before touching any element:

    left, right = as_vector([0, 1]), as_vector([3, 2])
    validate_dimensions(left, right)

Coerced vectors are read-only float32 views; the caller's data is never
written to.
"""

from typing import Sequence, Tuple, Union

import numpy as np

from .errors import DimensionMismatch, VectorElementError, VectorShapeError

VectorLike = Union[Sequence[float], np.ndarray]

# bool, signed int, unsigned int, float
_NUMERIC_KINDS = "biuf"


def as_vector(values: VectorLike) -> np.ndarray:
    """Coerce a sequence of numbers to a read-only 1-D float32 array.

    Args:
        values: List, tuple, numpy array, or any array-like accepted by numpy

    Returns:
        1-D numpy array with dtype float32 and the writeable flag cleared

    Raises:
        VectorShapeError: If the input is a scalar or has more than one dimension
        VectorElementError: If an element is not a number (None, a string, ...)
    """
    raw = np.asarray(values)
    if raw.ndim != 1:
        raise VectorShapeError(raw.ndim)
    # float32 would silently read None as nan and "1" as 1.0
    if raw.dtype.kind not in _NUMERIC_KINDS:
        raise VectorElementError(raw.dtype)

    # view() so clearing the writeable flag never touches the caller's array
    vector = raw.astype(np.float32, copy=False).view()
    vector.flags.writeable = False
    return vector


def validate_dimensions(left: VectorLike, right: VectorLike) -> None:
    """Raise DimensionMismatch unless both vectors have the same length."""
    if len(left) != len(right):
        raise DimensionMismatch(len(left), len(right))


def as_operands(left: VectorLike, right: VectorLike) -> Tuple[np.ndarray, np.ndarray]:
    """Coerce both operands and check their dimensions."""
    left = as_vector(left)
    right = as_vector(right)
    validate_dimensions(left, right)
    return left, right
