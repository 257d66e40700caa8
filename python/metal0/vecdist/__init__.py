"""vecdist - Vector distance kernels for similarity search."""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    DimensionMismatch,
    RegistryFrozenError,
    UnknownMetricError,
    VecdistError,
    VectorElementError,
    VectorShapeError,
)
from .vector import as_vector, validate_dimensions
from .kernels import cosine_distance, dot_product_distance, squared_euclidean_distance
from .metric import DistanceResult, Metric, distance, try_distance
from .config import Settings, configure_logging, load_settings
from .operators import (
    Operator,
    OperatorRegistry,
    configured_distance,
    default_registry,
    evaluate,
)

# duckdb is optional - import lazily to avoid ImportError if not installed
def __getattr__(name):
    if name == "duckdb":
        from . import duckdb
        return duckdb
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "ConfigError",
    "DimensionMismatch",
    "DistanceResult",
    "Metric",
    "Operator",
    "OperatorRegistry",
    "RegistryFrozenError",
    "Settings",
    "UnknownMetricError",
    "VecdistError",
    "VectorElementError",
    "VectorShapeError",
    "as_vector",
    "configure_logging",
    "configured_distance",
    "cosine_distance",
    "default_registry",
    "distance",
    "dot_product_distance",
    "evaluate",
    "load_settings",
    "squared_euclidean_distance",
    "try_distance",
    "validate_dimensions",
    "__version__",
]
