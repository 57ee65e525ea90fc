"""Feature engineering: daily aggregation, calendar encodings, sequences."""

from .daily import aggregate_daily, to_daily_records, add_calendar_features, DAILY_COLUMNS
from .sequences import build_sequences, split_sequences

__all__ = [
    "aggregate_daily", "to_daily_records", "add_calendar_features", "DAILY_COLUMNS",
    "build_sequences", "split_sequences"
]
