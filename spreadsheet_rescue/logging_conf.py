import logging
from logging.config import dictConfig

import structlog

from spreadsheet_rescue.settings import config


def setup_logging() -> None:
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "class": "logging.Formatter",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "format": "%(name)s:%(lineno)d - %(message)s",
                },
            },
            "handlers": {
                "default": {
                    "class": "rich.logging.RichHandler",
                    "level": config.LOG_LEVEL,
                    "formatter": "console",
                    "rich_tracebacks": True,
                },
            },
            "loggers": {
                "spreadsheet_rescue": {
                    "handlers": ["default"],
                    "level": config.LOG_LEVEL,
                    "propagate": False,
                },
            },
        }
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.LOG_LEVEL)
        ),
        cache_logger_on_first_use=True,
    )
