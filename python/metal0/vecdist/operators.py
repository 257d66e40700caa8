"""Operator registry.

Maps operator tokens used in ranking expressions to distance kernels:

    <->   squared_euclidean_distance   immutable, parallel-safe
    <#>   dot_product_distance         immutable, parallel-safe
    <=>   cosine_distance              immutable, parallel-safe

The default registry is built once at import time and frozen. A host that
wants more operators builds its own registry, registers them, and freezes it
before handing it to the query engine.

Example:
    >>> from metal0.vecdist.operators import evaluate, default_registry
    >>> evaluate("<->", [0, 1], [3, 2])
    10.0
    >>> default_registry()["<=>"].name
    'cosine_distance'
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from .config import Settings, load_settings
from .errors import RegistryFrozenError, UnknownMetricError
from .metric import Kernel, Metric
from .vector import VectorLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operator:
    """A kernel bound to an operator token.

    `immutable` tells the host it may cache results for identical inputs;
    `parallel_safe` tells it the kernel may run across workers without
    synchronization.
    """

    token: str
    name: str
    kernel: Kernel
    metric: Optional[Metric] = None
    immutable: bool = True
    parallel_safe: bool = True
    description: str = ""

    def __call__(self, left: VectorLike, right: VectorLike) -> float:
        return self.kernel(left, right)

    @property
    def properties(self) -> List[str]:
        props = []
        if self.immutable:
            props.append("immutable")
        if self.parallel_safe:
            props.append("parallel_safe")
        return props


class OperatorRegistry:
    """Token -> Operator table, read-only once frozen."""

    def __init__(self):
        self._operators: Dict[str, Operator] = {}
        self._frozen = False

    def register(
        self,
        token: str,
        kernel: Kernel,
        *,
        name: Optional[str] = None,
        metric: Optional[Metric] = None,
        immutable: bool = True,
        parallel_safe: bool = True,
        description: Optional[str] = None,
    ) -> Operator:
        """Bind `kernel` to `token`.

        Args:
            token: Operator token, e.g. "<->"
            kernel: Callable taking (left, right) and returning a float
            name: Function name exposed to hosts. Defaults to kernel.__name__
            metric: Metric this kernel implements, if any
            immutable: Results may be cached for identical inputs
            parallel_safe: Kernel may run concurrently without locking
            description: Defaults to the first line of the kernel docstring

        Raises:
            RegistryFrozenError: If the registry is frozen or token is taken
        """
        if self._frozen:
            raise RegistryFrozenError(f"Registry is frozen, cannot register {token!r}")
        if token in self._operators:
            raise RegistryFrozenError(f"Operator {token!r} is already registered")

        if description is None:
            doc = (kernel.__doc__ or "").strip()
            description = doc.splitlines()[0] if doc else ""

        op = Operator(
            token=token,
            name=name or kernel.__name__,
            kernel=kernel,
            metric=metric,
            immutable=immutable,
            parallel_safe=parallel_safe,
            description=description,
        )
        self._operators[token] = op
        logger.debug("Registered operator %s -> %s", token, op.name)
        return op

    def register_metric(self, metric: Metric, **kwargs) -> Operator:
        """Register a Metric under its own token and kernel."""
        return self.register(metric.token, metric.kernel, metric=metric, **kwargs)

    def freeze(self) -> "OperatorRegistry":
        """Make the registry read-only. Returns self."""
        if not self._frozen:
            self._frozen = True
            logger.debug("Froze operator registry with %d operators", len(self._operators))
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def operators(self) -> Mapping[str, Operator]:
        """Read-only view of token -> Operator."""
        return MappingProxyType(self._operators)

    def get(self, token: str) -> Operator:
        """Look up an operator by token.

        Raises:
            UnknownMetricError: If no operator is bound to `token`
        """
        try:
            return self._operators[token]
        except KeyError:
            raise UnknownMetricError(f"Unknown operator: {token!r}") from None

    def by_name(self, name: str) -> Operator:
        """Look up an operator by its function name."""
        for op in self._operators.values():
            if op.name == name:
                return op
        raise UnknownMetricError(f"Unknown operator function: {name!r}")

    def evaluate(self, token: str, left: VectorLike, right: VectorLike) -> float:
        """Apply the operator bound to `token`.

        Raises:
            DimensionMismatch: If the vectors differ in length
            UnknownMetricError: If no operator is bound to `token`
        """
        return self.get(token)(left, right)

    def __getitem__(self, token: str) -> Operator:
        return self.get(token)

    def __contains__(self, token: object) -> bool:
        return token in self._operators

    def __iter__(self) -> Iterator[Operator]:
        return iter(list(self._operators.values()))

    def __len__(self) -> int:
        return len(self._operators)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<OperatorRegistry {state} tokens={list(self._operators)}>"


def _build_default_registry() -> OperatorRegistry:
    registry = OperatorRegistry()
    for metric in Metric:
        registry.register_metric(metric)
    return registry.freeze()


_default_registry = _build_default_registry()


def default_registry() -> OperatorRegistry:
    """The frozen registry holding the built-in operators."""
    return _default_registry


def evaluate(token: str, left: VectorLike, right: VectorLike) -> float:
    """Apply a built-in operator by token."""
    return _default_registry.evaluate(token, left, right)


def configured_distance(
    left: VectorLike, right: VectorLike, settings: Optional[Settings] = None
) -> float:
    """Compute the distance under the metric configured in VECDIST_METRIC.

    Args:
        left: First vector
        right: Second vector
        settings: Settings to use instead of reading the environment
    """
    settings = settings or load_settings()
    return settings.metric.distance(left, right)
