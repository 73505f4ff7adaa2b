"""
Debugging logging utilities.
"""

import logging
import sys

LOGGER_NAME = 'hand_tracking'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name=None):
    """Return a logger inside the hand_tracking hierarchy."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


class DebugLogger:
    """Debug logging with different verbosity levels."""

    # Log levels
    LEVEL_ERROR = 0
    LEVEL_WARNING = 1
    LEVEL_INFO = 2
    LEVEL_DEBUG = 3
    LEVEL_TRACE = 4

    _LOGGING_LEVELS = {
        LEVEL_ERROR: logging.ERROR,
        LEVEL_WARNING: logging.WARNING,
        LEVEL_INFO: logging.INFO,
        LEVEL_DEBUG: logging.DEBUG,
        LEVEL_TRACE: logging.DEBUG,
    }

    def __init__(self, level=LEVEL_INFO, log_to_file=False, filename="hand_tracking_debug.log",
                 stream=None):
        """Initialize debug logger with specified verbosity level."""
        self.level = level
        self.log_to_file = log_to_file
        self.filename = filename

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        # Every module logs below this one, so one set of handlers covers the package
        self.logger = get_logger()
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(stream or sys.stdout)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_to_file:
            file_handler = logging.FileHandler(filename)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        self.set_level(level)

    def error(self, message, *args):
        self.logger.error(message, *args)

    def warning(self, message, *args):
        self.logger.warning(message, *args)

    def info(self, message, *args):
        self.logger.info(message, *args)

    def debug(self, message, *args):
        self.logger.debug(message, *args)

    def trace(self, message, *args):
        """Very verbose output, only emitted at LEVEL_TRACE."""
        if self.level >= self.LEVEL_TRACE:
            self.logger.debug("[TRACE] " + message, *args)

    def set_level(self, level):
        """Map a DebugLogger level onto the underlying logging level."""
        self.level = level
        self.logger.setLevel(self._LOGGING_LEVELS.get(level, logging.DEBUG))

    def log_performance(self, component, duration_ms):
        self.logger.debug("[PERF] %s: %.2fms", component, duration_ms)
