import json
import logging
import logging.config
from typing import Optional

from img_meta.core.config import configs


class JsonFormatter(logging.Formatter):
    """
    Formatter for logging in JSON format.
    """

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


# -----------------------------------------------------------------------------
# Development Logging Configuration
# -----------------------------------------------------------------------------
# Readable text on stderr. stdout is reserved for the report itself.
def _dev_logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "default",
            },
        },
        "loggers": {
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
            "img_meta": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
            # External Libraries Noise Reduction
            "PIL": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


# -----------------------------------------------------------------------------
# Production Logging Configuration
# -----------------------------------------------------------------------------
# JSON structured, one object per line, for CI log collectors.
def _prod_logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonFormatter,
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            },
        },
        "handlers": {
            "console_json": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "json",
            },
        },
        "loggers": {
            "root": {
                "level": "WARNING",
                "handlers": ["console_json"],
            },
            "img_meta": {
                "level": level,
                "handlers": ["console_json"],
                "propagate": False,
            },
            "PIL": {
                "level": "WARNING",
                "handlers": ["console_json"],
                "propagate": False,
            },
        },
    }


def setup_logging(level: Optional[str] = None):
    """
    Set up logging configuration based on the environment.
    """
    env = configs.ENVIRONMENT.lower()
    level = (level or configs.LOG_LEVEL).upper()

    if env == "production":
        log_config = _prod_logging_config(level)
    else:
        log_config = _dev_logging_config(level)

    # Apply configuration
    logging.config.dictConfig(log_config)

    logger = logging.getLogger("img_meta")
    logger.debug(f"Logging setup complete for {env} environment with level {level}")
