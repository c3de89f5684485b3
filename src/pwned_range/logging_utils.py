"""Logging helpers."""

from __future__ import annotations

import logging

LOGGER_NAME = "pwned_range"


def get_logger() -> logging.Logger:
    """Return the package logger; handlers and levels belong to the host application."""
    return logging.getLogger(LOGGER_NAME)
