import logging
import logging.config
from typing import Optional

from user_service.infrastructure.config.settings import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the API process and the scripts."""
    if level is None:
        level = Settings().LOG_LEVEL
    level = level.upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                    "level": level,
                }
            },
            "root": {"handlers": ["default"], "level": level},
            "loggers": {
                # SQL echo is driven by DATABASE_ECHO, keep the engine logger quiet otherwise
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )


class Logger:
    @staticmethod
    def get_logger(name: Optional[str] = None) -> logging.Logger:
        return logging.getLogger(name)
