"""DuckDB integration for vecdist operators.

Registers each operator as a scalar Python UDF so ranking queries can call
the kernels from SQL. DuckDB has no user-defined operator tokens, so the
functions are exposed under their kernel names with a prefix.

Usage:
    import duckdb
    from metal0.vecdist.duckdb import register_functions

    con = duckdb.connect()
    register_functions(con)
    con.execute(
        "SELECT id FROM items "
        "ORDER BY vec_squared_euclidean_distance(embedding, ?::FLOAT[]) LIMIT 10",
        [query],
    ).fetchall()

Functions are Arrow-vectorized UDFs returning FLOAT. A NULL operand gives a
NULL distance, while a NULL element inside a list is an error. A non-finite
result (NaN from a zero-norm cosine, inf on overflow) stays NaN/inf in SQL.
A dimension mismatch aborts the statement with a DuckDB error whose message
carries both operand lengths.
"""

import logging
from typing import Callable, Dict, List, Optional

try:
    import duckdb
except ImportError:
    raise ImportError(
        "duckdb is required for this module. "
        "Install it with: pip install duckdb"
    )
import pyarrow as pa

from .errors import DimensionMismatch, VectorElementError
from .operators import Operator, OperatorRegistry, default_registry

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "vec_"
VECTOR_TYPE = "FLOAT[]"
DISTANCE_TYPE = "FLOAT"


def function_names(
    registry: Optional[OperatorRegistry] = None,
    prefix: str = DEFAULT_PREFIX,
) -> Dict[str, str]:
    """Map operator token -> SQL function name for a registry."""
    if registry is None:
        registry = default_registry()
    return {op.token: f"{prefix}{op.name}" for op in registry}


def _make_udf(op: Operator) -> Callable:
    # Vectorized over a DuckDB chunk. A plain Python UDF maps a float NaN
    # result to NULL; a float32 Arrow array keeps it as NaN.
    def udf(left, right):
        values = []
        for lhs, rhs in zip(left.to_pylist(), right.to_pylist()):
            if lhs is None or rhs is None:
                values.append(None)
                continue
            try:
                values.append(op(lhs, rhs))
            except (DimensionMismatch, VectorElementError) as e:
                logger.debug("%s (%s) rejected operands: %s", op.name, op.token, e)
                raise duckdb.InvalidInputException(f"{op.token}: {e}") from e
        return pa.array(values, type=pa.float32())

    udf.__name__ = op.name
    udf.__doc__ = op.description
    return udf


def register_functions(
    con: "duckdb.DuckDBPyConnection",
    registry: Optional[OperatorRegistry] = None,
    prefix: str = DEFAULT_PREFIX,
) -> List[str]:
    """Register every operator in `registry` as a DuckDB scalar function.

    Args:
        con: DuckDB connection
        registry: Operators to register. Defaults to the built-in registry
        prefix: Prepended to each kernel name to form the SQL function name

    Returns:
        Names of the registered SQL functions
    """
    if registry is None:
        registry = default_registry()
    names = []
    for op in registry:
        name = f"{prefix}{op.name}"
        con.create_function(
            name,
            _make_udf(op),
            parameters=[VECTOR_TYPE, VECTOR_TYPE],
            return_type=DISTANCE_TYPE,
            type="arrow",
            null_handling="special",
            side_effects=not op.immutable,
        )
        names.append(name)
        logger.info("Registered DuckDB function %s for operator %s", name, op.token)
    return names


def unregister_functions(
    con: "duckdb.DuckDBPyConnection",
    registry: Optional[OperatorRegistry] = None,
    prefix: str = DEFAULT_PREFIX,
) -> None:
    """Remove functions added by register_functions."""
    for name in function_names(registry, prefix).values():
        con.remove_function(name)
        logger.info("Removed DuckDB function %s", name)
