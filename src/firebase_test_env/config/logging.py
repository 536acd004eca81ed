#!/usr/bin/env python3
"""
Centralized logging configuration.

Provides bootstrap_logging, called from CLI entry points and test setup to
configure logging consistently using Python's native INI format.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
FALLBACK_FORMAT = '%(levelname)s: %(name)s: %(message)s'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory or config/ subdirectory.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    for candidate in (Path('logging.ini'), Path('config/logging.ini')):
        if candidate.exists():
            return candidate
    return None


def _resolve_level(debug: bool = False) -> str:
    """Pick the log level from the debug flag or LOG_LEVEL, defaulting to INFO."""
    if debug:
        return 'DEBUG'

    log_level = os.environ.get('LOG_LEVEL', 'INFO').strip().upper()
    if log_level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using INFO", file=sys.stderr)
        return 'INFO'
    return log_level


def bootstrap_logging(debug: bool = False) -> None:
    """
    Bootstrap logging configuration for the application.

    This function:
    1. Loads logging.ini using logging.config.fileConfig() when one is present
    2. Falls back to basicConfig on stderr otherwise
    3. Applies the LOG_LEVEL environment variable (or --debug) on top

    Args:
        debug: Force DEBUG level regardless of LOG_LEVEL
    """
    level = _resolve_level(debug)
    config_path = _find_logging_config()

    if config_path is not None:
        try:
            logging.config.fileConfig(str(config_path), disable_existing_loggers=False)
        except Exception as e:
            print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
            config_path = None

    if config_path is None:
        logging.basicConfig(level=level, format=FALLBACK_FORMAT, stream=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(getattr(logging, level))

    logging.getLogger(__name__).debug(
        f"Logging configured at {level} from {config_path or 'basicConfig'}"
    )
