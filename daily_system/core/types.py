"""Record types shared across the package."""

from dataclasses import dataclass, asdict
from datetime import date, datetime


@dataclass(frozen=True)
class Tick:
    """Single minute-resolution price observation."""
    timestamp: datetime
    open: float
    close: float
    high: float = float('nan')
    low: float = float('nan')
    volume: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DailyRecord:
    """Aggregated open/close for one calendar day."""
    date: date
    open: float
    close: float
    ret: float
    month: int
    day_of_month: int

    def to_dict(self) -> dict:
        """Convert to dictionary using the frame column names."""
        return {
            'date': self.date,
            'open': self.open,
            'close': self.close,
            'return': self.ret,
            'month': self.month,
            'day_of_month': self.day_of_month
        }
