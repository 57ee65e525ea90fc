"""Exceptions raised by the daily system."""


class DailySystemError(ValueError):
    """Base class for all daily system errors."""


class InvalidInputError(DailySystemError):
    """Input data or parameter is unusable (empty, non-positive, malformed)."""


class DimensionMismatchError(DailySystemError):
    """Decision vector and evaluation window have different lengths."""

    def __init__(self, expected: int, actual: int, what: str = "decisions"):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Length of {what} ({actual}) does not match evaluation window ({expected})"
        )
