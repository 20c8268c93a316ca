"""Shared utilities for Gambit Bracket."""

# Gambit Bracket
# Copyright (C) 2025  Gambit Bracket developers
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

from gambitbracket.constants import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_LEVEL_ENV_VAR,
    LOGGER_ROOT,
)


def _configure_root_logger() -> logging.Logger:
    """Attach the package handler to the root package logger exactly once."""
    root = logging.getLogger(LOGGER_ROOT)
    if not getattr(root, "_gambit_configured", False):
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.getLevelName(DEFAULT_LOG_LEVEL)

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(level)
        root._gambit_configured = True
    return root


def setup_logger(name: str) -> logging.Logger:
    """Get a logger inside the ``gambitbracket`` hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger that propagates to the configured package logger
    """
    _configure_root_logger()
    if name != LOGGER_ROOT and not name.startswith(LOGGER_ROOT + "."):
        name = f"{LOGGER_ROOT}.{name}"
    return logging.getLogger(name)


__all__ = ["setup_logger"]
