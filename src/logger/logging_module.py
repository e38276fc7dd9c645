import logging
import sys
from logging import Logger

from injector import Module, provider, singleton

from labels import ANSI_BOLD, ANSI_DIM, ANSI_RED, ANSI_RESET, ANSI_YELLOW

# Adapted from https://stackoverflow.com/a/56944256/782170

LOGGER_NAME = 'diff-viewer'


class CustomFormatter(logging.Formatter):
    format_style = '%(asctime)s [%(levelname)s] - %(name)s:%(filename)s:%(funcName)s\n%(message)s'

    FORMATS = {
        logging.DEBUG: ANSI_DIM + format_style + ANSI_RESET,
        logging.WARNING: ANSI_YELLOW + format_style + ANSI_RESET,
        logging.ERROR: ANSI_RED + format_style + ANSI_RESET,
        logging.CRITICAL: ANSI_BOLD + ANSI_RED + format_style + ANSI_RESET,
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, CustomFormatter.format_style)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


class LoggingModule(Module):
    @provider
    @singleton
    def provide_logger(self) -> Logger:
        result = logging.Logger(LOGGER_NAME)
        result.setLevel(logging.INFO)
        # Keep stdout for the rendered diff.
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(CustomFormatter())
        result.addHandler(h)
        return result
