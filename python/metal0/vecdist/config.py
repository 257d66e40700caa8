"""Environment configuration.

Settings are read from the environment on demand:

    VECDIST_METRIC      Default metric (token, name or alias). Default: squared_euclidean
    VECDIST_LOG_LEVEL   Logging level name or number. Default: WARNING
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from .errors import ConfigError, UnknownMetricError
from .metric import Metric

ENV_METRIC = "VECDIST_METRIC"
ENV_LOG_LEVEL = "VECDIST_LOG_LEVEL"

PACKAGE_LOGGER = "metal0.vecdist"


@dataclass(frozen=True)
class Settings:
    metric: Metric = Metric.SQUARED_EUCLIDEAN
    log_level: int = logging.WARNING


def parse_log_level(value: Union[str, int]) -> int:
    """Turn "debug", "INFO", "10" or 10 into a logging level number."""
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ

    Raises:
        ConfigError: If a variable is set to an invalid value
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    metric = defaults.metric
    raw_metric = env.get(ENV_METRIC)
    if raw_metric:
        try:
            metric = Metric.parse(raw_metric)
        except UnknownMetricError as e:
            raise ConfigError(f"{ENV_METRIC}: {e}") from e

    log_level = defaults.log_level
    raw_level = env.get(ENV_LOG_LEVEL)
    if raw_level:
        try:
            log_level = parse_log_level(raw_level)
        except ValueError as e:
            raise ConfigError(f"{ENV_LOG_LEVEL}: {e}") from e

    return Settings(metric=metric, log_level=log_level)


def configure_logging(level: Union[str, int, None] = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Calling this more than once only updates the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if level is not None:
        logger.setLevel(parse_log_level(level))

    if not any(getattr(h, "_vecdist", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handler._vecdist = True
        logger.addHandler(handler)

    return logger
