"""Logging helpers."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import sys
import tempfile
from logging.handlers import RotatingFileHandler

from courtpairing.constants import ENV_LOG_FILE, ENV_LOG_LEVEL

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"

LOG_FILE_NAME = "court-pairing.log"

PACKAGE_LOGGER = "courtpairing"


def _log_level() -> int:
    level_name = os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def _file_logging_enabled() -> bool:
    return os.environ.get(ENV_LOG_FILE, "").strip().lower() in {"1", "true", "yes"}


def _create_file_handler(log_formatter: logging.Formatter):
    """Create a rotating file handler in the temp location, or None."""
    log_folder = os.path.join(tempfile.gettempdir(), "court-pairing", "logs")
    try:
        os.makedirs(log_folder, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_folder, LOG_FILE_NAME),
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    except OSError:
        # read-only or missing temp dir, continue without file logging
        return None
    file_handler.setFormatter(log_formatter)
    return file_handler


def _attach_file_handler(log_formatter: logging.Formatter) -> None:
    """Attach the single file handler to the package logger.

    Module loggers propagate to it, so every module shares one file.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if any(isinstance(h, RotatingFileHandler) for h in package_logger.handlers):
        return
    file_handler = _create_file_handler(log_formatter)
    if file_handler:
        package_logger.addHandler(file_handler)


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up logger for a python module.

    Sets up a console handler. When COURTPAIRING_LOG_FILE is set, records
    also reach the rotating file handler shared by the package logger.

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    lgr.setLevel(_log_level())
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    # Console Handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(_log_level())
    lgr.addHandler(console_handler)

    if _file_logging_enabled():
        _attach_file_handler(log_formatter)
    lgr.debug("logger %s initialized", logger_name)
    return lgr


def set_log_level(level: int, prefix: str = PACKAGE_LOGGER) -> None:
    """Change the level of every package logger and its handlers."""
    for name in list(logging.root.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            lgr = logging.getLogger(name)
            lgr.setLevel(level)
            for handler in lgr.handlers:
                handler.setLevel(level)
