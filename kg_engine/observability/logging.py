"""
Logging Setup

Console logging for the engine's package logger. Nothing is attached
until the host calls configure_logging(); the level then comes from the
LOG_LEVEL environment variable (a .env file is honoured).
"""

import logging
import os
import sys

from dotenv import load_dotenv


PACKAGE_LOGGER = "kg_engine"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


class ANSIColors:
    """Terminal colors per level."""

    DEBUG = "\033[36m"    # Cyan
    INFO = "\033[32m"     # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"    # Red
    CRITICAL = "\033[1;31m"  # Bold Red
    RESET = "\033[0m"


class CustomFormatter(logging.Formatter):
    """Colored console output, or annotation syntax under GitHub Actions."""

    def format(self, record):
        log_message = super().format(record)

        if os.getenv("GITHUB_ACTIONS") == "true":
            if record.levelno == logging.DEBUG:
                return f"::debug::{log_message}"
            elif record.levelno == logging.WARNING:
                return f"::warning::{log_message}"
            elif record.levelno >= logging.ERROR:
                return f"::error::{log_message}"
            return log_message

        log_color = {
            logging.DEBUG: ANSIColors.DEBUG,
            logging.INFO: ANSIColors.INFO,
            logging.WARNING: ANSIColors.WARNING,
            logging.ERROR: ANSIColors.ERROR,
            logging.CRITICAL: ANSIColors.CRITICAL,
        }.get(record.levelno, ANSIColors.RESET)

        return f"{log_color}{log_message}{ANSIColors.RESET}"


def resolve_log_level(value=None):
    """Map a level name to a logging constant (invalid -> INFO)."""
    level = (value or os.getenv("LOG_LEVEL", "INFO")).upper()
    if level not in VALID_LOG_LEVELS:
        level = "INFO"
    return getattr(logging, level)


def configure_logging(level=None):
    """Attach the console handler to the package logger once."""
    load_dotenv()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    configured = any(
        getattr(h, "_kg_engine_handler", False) for h in package_logger.handlers
    )
    if not configured:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(CustomFormatter(LOG_FORMAT))
        console_handler._kg_engine_handler = True
        package_logger.addHandler(console_handler)
    # an explicit level always wins; otherwise only set on first use
    if level is not None or not configured:
        package_logger.setLevel(resolve_log_level(level))
    return package_logger


def get_logger(name: str):
    """Module logger under the package logger; output follows configure_logging()."""
    return logging.getLogger(name)
