import logging
import logging.config

import structlog

FORMAT = "%(message)s"


def set_level_of_loggers_with_prefix(level, logger_name_prefix: str):
    """Route the loggers under `logger_name_prefix` to a rich handler at `level`."""
    if not isinstance(logger_name_prefix, str):
        raise TypeError("Logger name prefix must be a string")

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'loggers': {
            logger_name_prefix: {
                'level': level,
                'handlers': ['rich'],
                'propagate': False,
            },
        },
        'handlers': {
            'rich': {
                'class': 'rich.logging.RichHandler',
                'formatter': 'rich',
            },
        },
        'formatters': {
            'rich': {
                'format': FORMAT,
            },
        },
    })


def configure_structlog(level: int = logging.INFO) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
