"""Core types and exceptions."""

from .errors import DailySystemError, InvalidInputError, DimensionMismatchError
from .types import Tick, DailyRecord

__all__ = ["DailySystemError", "InvalidInputError", "DimensionMismatchError", "Tick", "DailyRecord"]
