"""
Logging configuration that suppresses urllib3 retry noise while polling
"""

import logging
import logging.config
from typing import Dict, Any


class RetryNoiseFilter(logging.Filter):
    """Filter to suppress urllib3 connection retry warnings."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Drop 'Retrying (...)' records from urllib3's connection pool."""
        # The readiness loop expects the control plane to refuse connections for a while
        if record.name.startswith("urllib3"):
            message = record.getMessage()
            if message.startswith("Retrying (") and record.levelno <= logging.WARNING:
                return False
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with retry noise suppression."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "retry_noise_filter": {
                "()": RetryNoiseFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "runner": {
                "format": "%(asctime)s - runner - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "runner": {
                "class": "logging.StreamHandler",
                "formatter": "runner",
                "stream": "ext://sys.stdout"
            },
            "transport": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["retry_noise_filter"]
            }
        },
        "loggers": {
            "urllib3": {
                "handlers": ["transport"],
                "level": "WARNING",
                "propagate": False
            },
            "kubernetes": {
                "handlers": ["transport"],
                "level": "WARNING",
                "propagate": False
            },
            "kubeinterp.runner": {
                "handlers": ["runner"],
                "level": level,
                "propagate": False
            },
            "kubeinterp": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "INFO",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the kubeinterp logging configuration."""
    logging.config.dictConfig(get_logging_config(level.upper()))
