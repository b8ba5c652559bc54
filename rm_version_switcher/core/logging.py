import logging
import os
import sys
import traceback
from typing import Optional

from rm_version_switcher.core.config import settings

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

CONSOLE_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(source_file)s:%(line_number)d - %(message)s"
)
DEBUG_LOG_FORMAT = "[%(asctime)s] %(message)s"
DEBUG_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class ContextFilter(logging.Filter):
    """
    A logging filter that adds the originating file, line and function to log records
    """

    def filter(self, record):
        if not hasattr(record, "source_file"):
            try:
                if record.exc_info and record.exc_info[2] is not None:
                    last_frame = traceback.extract_tb(record.exc_info[2])[-1]
                    record.source_file = os.path.basename(last_frame.filename)
                    record.line_number = last_frame.lineno
                    record.source_function = last_frame.name
                else:
                    record.source_file = os.path.basename(record.pathname)
                    record.line_number = record.lineno
                    record.source_function = record.funcName
            except Exception:
                record.source_file = "Unknown"
                record.line_number = 0
                record.source_function = "Unknown"
        return True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name
    """
    return logging.getLogger(f"{name}")


def configure_logging(debug_mode: bool = False, debug_log_file: Optional[str] = None):
    """
    Configure logging with a console handler and, in debug mode, a file handler

    Args:
        debug_mode: Whether to append DEBUG level records to the debug log file
        debug_log_file: Path of the debug log, defaults to settings.DEBUG_LOG_FILE
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    context_filter = ContextFilter()

    console_stream_handler = logging.StreamHandler(sys.stderr)
    console_stream_handler.addFilter(context_filter)
    console_stream_handler.setFormatter(
        logging.Formatter(CONSOLE_LOG_FORMAT)
    )
    console_stream_handler.setLevel(
        LOG_LEVELS.get(settings.LOG_LEVEL.upper(), logging.WARNING)
    )
    root_logger.addHandler(console_stream_handler)

    if debug_mode:
        # debug.log - gets everything, appended across runs
        debug_file_handler = logging.FileHandler(
            debug_log_file or settings.DEBUG_LOG_FILE, mode="a"
        )
        debug_file_handler.addFilter(context_filter)
        debug_file_handler.setFormatter(
            logging.Formatter(DEBUG_LOG_FORMAT, datefmt=DEBUG_LOG_DATEFMT)
        )
        debug_file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(debug_file_handler)

    root_logger.setLevel(logging.DEBUG)
