"""
Logging configuration for the microadmin service.

Kubernetes probes hit /health and /healthz every few seconds; their access
log lines are dropped so refresh activity stays readable.
"""

import logging
import logging.config
from typing import Any, Dict

PROBE_PATHS = ("/health", "/healthz")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access records for probe requests."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name != "uvicorn.access":
            return True
        message = record.getMessage()
        return not ("GET" in message and any(path in message for path in PROBE_PATHS))


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Build a dictConfig mapping.

    The service's own loggers and the root logger follow ``level``;
    uvicorn stays at INFO. ``uvicorn.error`` propagates into ``uvicorn``.
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"probes": {"()": HealthCheckFilter}},
        "formatters": {
            "default": {"format": LOG_FORMAT},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["probes"],
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["stdout"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        },
        "root": {"level": level, "handlers": ["stdout"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration to the running process."""
    logging.config.dictConfig(get_logging_config(level))
