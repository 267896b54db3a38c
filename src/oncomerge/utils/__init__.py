"""Utility functions."""

from oncomerge.utils.logging_config import ClassificationLogger, get_logger, reset_logger

__all__ = [
    'ClassificationLogger',
    'get_logger',
    'reset_logger',
]
