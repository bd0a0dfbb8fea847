"""Logging setup shared by the API process and Celery workers."""

import logging.config

from src.config import Settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)-5s] %(name)s: %(message)s"


def default_log_level(settings: Settings) -> str:
    if settings.log_level:
        return settings.log_level.upper()
    if settings.is_test:
        return "WARNING"
    return "INFO" if settings.is_production else "DEBUG"


def configure_logging(settings: Settings) -> None:
    """Install a single stream handler on the root logger.

    SQLAlchemy's engine logger echoes queries outside production and only
    reports errors in production.
    """
    level = default_log_level(settings)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {
                "sqlalchemy.engine": {
                    "level": "WARNING" if settings.is_production or settings.is_test else "INFO",
                },
            },
        }
    )
