"""Utilities module."""
from .logger import get_logger
from .result import Result

__all__ = ["get_logger", "Result"]
