"""
Logging configuration.

Development gets a readable single-line format; every other environment
logs JSON lines so the output can be shipped to a log aggregator as-is.
"""
import logging.config
import sys

from pythonjsonlogger.json import JsonFormatter

from .settings import Settings


def get_logging_config(environment: str = "development", level: str = "INFO") -> dict:
    """
    Get the dictConfig for the application.

    Args:
        environment: Environment name (development, production, test)
        level: Root log level name

    Returns:
        Logging configuration dictionary
    """
    formatter = "simple" if environment == "development" else "json"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "simple": {
                "format": "{asctime} {levelname} {name}: {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
        "loggers": {
            "sqlalchemy.engine": {
                "level": "WARNING",
            },
            "uvicorn.access": {
                "level": "WARNING" if environment == "production" else "INFO",
            },
        },
    }


def configure_logging(settings: Settings):
    """Apply the logging configuration for the given settings."""
    logging.config.dictConfig(get_logging_config(settings.environment, settings.log_level))
