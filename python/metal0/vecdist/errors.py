"""Exceptions raised by vecdist."""


class VecdistError(Exception):
    """Base exception for all vecdist errors."""
    pass


class DimensionMismatch(VecdistError, ValueError):
    """Raised when two vectors passed to a distance kernel differ in length.

    This is always a caller input error. The kernel performs no computation
    and returns no partial result; retrying with the same inputs fails the
    same way.

    Attributes:
        left_len: Length of the left operand
        right_len: Length of the right operand
    """

    def __init__(self, left_len: int, right_len: int):
        super().__init__(f"wrong dimension: left({left_len}) != right({right_len})")
        self.left_len = left_len
        self.right_len = right_len

    def __reduce__(self):
        return (type(self), (self.left_len, self.right_len))

    def __eq__(self, other):
        if not isinstance(other, DimensionMismatch):
            return NotImplemented
        return (self.left_len, self.right_len) == (other.left_len, other.right_len)

    def __hash__(self):
        return hash((DimensionMismatch, self.left_len, self.right_len))


class VectorShapeError(VecdistError, ValueError):
    """Raised when an input cannot be read as a one-dimensional vector."""

    def __init__(self, ndim: int):
        super().__init__(f"expected a 1-D vector, got {ndim}-D input")
        self.ndim = ndim

    def __reduce__(self):
        return (type(self), (self.ndim,))


class VectorElementError(VecdistError, ValueError):
    """Raised when a vector holds something other than numbers."""

    def __init__(self, dtype):
        super().__init__(f"expected numeric vector elements, got {dtype}")
        self.dtype = str(dtype)

    def __reduce__(self):
        return (type(self), (self.dtype,))


class UnknownMetricError(VecdistError, ValueError):
    """Raised when a metric name or operator token is not recognised."""
    pass


class RegistryFrozenError(VecdistError, RuntimeError):
    """Raised when registering into a frozen registry or reusing a token."""
    pass


class ConfigError(VecdistError, ValueError):
    """Raised when an environment setting has an invalid value."""
    pass
