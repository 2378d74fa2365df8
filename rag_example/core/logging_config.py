"""Logging configuration for the RAG example application.
"""

import logging
import logging.config

# Define logging format
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL = logging.INFO

# Define the dictionary configuration
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False, # Keep existing loggers (e.g., uvicorn)
    "formatters": {
        "default": {
            "format": LOG_FORMAT,
            "datefmt": DATE_FORMAT,
        },
    },
    "handlers": {
        "console": {
            "level": logging.DEBUG,
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        # Root logger configuration
        "": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
        "uvicorn.error": {
            "level": logging.INFO,
            "handlers": ["console"],
            "propagate": False,
        },
        "uvicorn.access": {
            "level": logging.WARNING, # Reduce verbosity of access logs
            "handlers": ["console"],
            "propagate": False,
        },
        "httpx": {
            "level": logging.WARNING,
            "handlers": ["console"],
            "propagate": False,
        },
        "chromadb": {
            "level": logging.WARNING,
            "handlers": ["console"],
            "propagate": False,
        },
        "sentence_transformers": {
            "level": logging.WARNING,
            "handlers": ["console"],
            "propagate": False,
        },
    }
}


def build_logging_config(level: str | int = LOG_LEVEL) -> dict:
    """Returns a copy of LOGGING_CONFIG with the root logger set to ``level``."""
    config = {**LOGGING_CONFIG, "loggers": {k: dict(v) for k, v in LOGGING_CONFIG["loggers"].items()}}
    config["loggers"][""]["level"] = level.upper() if isinstance(level, str) else level
    return config


def configure_logging(level: str | int = LOG_LEVEL) -> None:
    """Applies the dictionary logging configuration (used by the CLI)."""
    logging.config.dictConfig(build_logging_config(level))
