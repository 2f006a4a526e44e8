"""Utility functions."""

import logging.config
import structlog
import yaml
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Union

DURATION_UNITS = ("days", "hours", "minutes", "seconds", "milliseconds")


def setup_logging(
    config_path: Optional[Union[str, Path]] = None,
    log_level: str = "INFO",
    log_format: str = "text",
) -> None:
    """Setup structured logging configuration."""
    use_json = log_format.lower() == "json"
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
        use_json = True
    else:
        logging.basicConfig(
            level=getattr(logging, log_level.upper()),
            format='%(message)s'
        )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def safe_get(dictionary: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Safely get a value from a nested dictionary using dot notation."""
    keys = key.split('.')
    value = dictionary

    try:
        for k in keys:
            value = value[k]
        return value
    except (KeyError, TypeError):
        return default


def parse_duration(value: Any) -> timedelta:
    """Parse a duration given as seconds or as a mapping of time units.

    Accepted forms::

        90
        {"minutes": 1, "seconds": 30}

    Raises ``ValueError`` for anything else, including unknown units and
    negative values.
    """
    if isinstance(value, timedelta):
        duration = value
    elif isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    elif isinstance(value, (int, float)):
        try:
            duration = timedelta(seconds=value)
        except OverflowError as e:
            raise ValueError(f"Duration out of range: {value!r}") from e
    elif isinstance(value, dict):
        if not value:
            raise ValueError("Duration mapping must not be empty")
        unknown = set(value) - set(DURATION_UNITS)
        if unknown:
            raise ValueError(f"Unknown duration units: {', '.join(sorted(map(str, unknown)))}")
        for unit, amount in value.items():
            if isinstance(amount, bool) or not isinstance(amount, (int, float)):
                raise ValueError(f"Duration amount for {unit} must be a number, got {amount!r}")
        try:
            duration = timedelta(**value)
        except OverflowError as e:
            raise ValueError(f"Duration out of range: {value!r}") from e
    else:
        raise ValueError(f"Invalid duration: {value!r}")

    if duration < timedelta(0):
        raise ValueError(f"Duration must not be negative: {value!r}")
    return duration
