import logging
from logging.config import dictConfig

LOGGER_NAME = "explorecali"
LOG_FORMAT = "%(levelprefix)s | %(asctime)s | %(message)s"


def create_log_config(log_level: str) -> dict:
    """Logging configuration for the ``explorecali`` logger tree."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["default"], "level": log_level},
        },
    }


def configure_logging(log_level: str) -> logging.Logger:
    dictConfig(create_log_config(log_level))
    return logging.getLogger(LOGGER_NAME)
