import os
import logging
from logging.handlers import RotatingFileHandler
import structlog
from structlog.stdlib import ProcessorFormatter, BoundLogger, add_logger_name
from structlog.processors import (
    JSONRenderer,
    TimeStamper,
    add_log_level,
    StackInfoRenderer,
    format_exc_info,
)
from rich.console import Console
from rich.logging import RichHandler
from structlog.dev import ConsoleRenderer

from jiffy.shared.path_handler import PathHandler


LOG_FILE_NAME = "jiffy.log"

# resolved per call so XDG_STATE_HOME is read when logging is set up
_DEFAULT_LOG_FILE = object()

LOGGER_NAME = "jiffy"


class RepeatFilter(logging.Filter):
    """Drops consecutive duplicates of the same skip notice."""

    def __init__(self):
        super().__init__()
        self._last_message = None

    def filter(self, record):
        message = record.getMessage()
        if record.levelno <= logging.WARNING and message == self._last_message:
            return False
        self._last_message = message
        return True


def setup_logging(
    level: int = logging.INFO, log_file: str | None | object = _DEFAULT_LOG_FILE
) -> BoundLogger:
    """
    Configures structlog over the "jiffy" stdlib logger.

    `log_file` defaults to $XDG_STATE_HOME/jiffy/jiffy.log; None disables
    the file handler and leaves only the stderr console.
    """
    if log_file is _DEFAULT_LOG_FILE:
        log_file = str(PathHandler().get_state_dir() / LOG_FILE_NAME)
    shared_processors = [
        add_log_level,
        TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
        StackInfoRenderer(),
        format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors
        + [
            add_logger_name,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    std_logger = logging.getLogger(LOGGER_NAME)
    std_logger.setLevel(level)
    std_logger.propagate = False
    for handler in std_logger.handlers[:]:
        std_logger.removeHandler(handler)
    repeat_filter = RepeatFilter()
    if log_file:
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1024 * 1024,
            backupCount=2,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        json_formatter = ProcessorFormatter(
            foreign_pre_chain=shared_processors + [add_logger_name],
            processor=JSONRenderer(),
        )
        file_handler.setFormatter(json_formatter)
        std_logger.addHandler(file_handler)
    # stdout carries the menu itself, so the console handler writes to stderr
    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_path=False,
        show_time=False,
    )
    console_handler.setLevel(level)
    console_handler.addFilter(repeat_filter)
    console_formatter_final = ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processor=ConsoleRenderer(colors=False),
        fmt="%(message)s",
    )
    console_handler.setFormatter(console_formatter_final)
    std_logger.addHandler(console_handler)
    return structlog.get_logger(LOGGER_NAME)
