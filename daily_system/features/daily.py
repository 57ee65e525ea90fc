"""Daily aggregation of minute ticks."""

import logging
from typing import List

import numpy as np
import pandas as pd

from daily_system.core.errors import InvalidInputError
from daily_system.core.types import DailyRecord

logger = logging.getLogger(__name__)

DAILY_COLUMNS = ['date', 'open', 'close', 'return', 'month', 'day_of_month']


def aggregate_daily(ticks: pd.DataFrame, price_col: str = 'close') -> pd.DataFrame:
    """
    Aggregate ticks into one record per calendar date.

    open is the price of the earliest tick of the date and close the price of
    the latest one, both read from price_col. A date with a single tick has
    open == close and a zero return.

    Args:
        ticks: DataFrame with 'timestamp', 'open', 'close'
        price_col: Tick column the daily prices are read from

    Returns:
        DataFrame with DAILY_COLUMNS, one row per date, ascending
    """
    if ticks is None or len(ticks) == 0:
        raise InvalidInputError("Tick sequence is empty")

    required = ['timestamp', 'open', 'close']
    missing = [col for col in required + [price_col] if col not in ticks.columns]
    if missing:
        raise InvalidInputError(f"Missing required columns: {missing}")

    for col in ['open', 'close', price_col]:
        prices = pd.to_numeric(ticks[col], errors='coerce')
        bad = ~np.isfinite(prices.astype(float)) | (prices <= 0)
        if bad.any():
            first = int(np.argmax(bad.values))
            raise InvalidInputError(
                f"Non-positive or missing '{col}' price at row {first}: {ticks[col].iloc[first]!r}"
            )

    try:
        timestamps = pd.to_datetime(ticks['timestamp'])
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Unparseable timestamp: {e}") from e
    if timestamps.isna().any():
        raise InvalidInputError("Missing timestamp in tick sequence")

    df = pd.DataFrame({
        'timestamp': timestamps.values,
        'price': pd.to_numeric(ticks[price_col]).astype(float).values
    })
    df = df.sort_values('timestamp', kind='stable')
    df['date'] = df['timestamp'].dt.date

    grouped = df.groupby('date', sort=True)['price']
    daily = pd.DataFrame({
        'open': grouped.first(),
        'close': grouped.last()
    }).reset_index()

    daily['return'] = daily['close'] / daily['open'] - 1
    daily['month'] = [d.month for d in daily['date']]
    daily['day_of_month'] = [d.day for d in daily['date']]

    logger.debug("Aggregated %d ticks into %d days", len(ticks), len(daily))
    return daily[DAILY_COLUMNS]


def to_daily_records(daily: pd.DataFrame) -> List[DailyRecord]:
    """Convert a daily frame into DailyRecord instances."""
    return [
        DailyRecord(
            date=row.date,
            open=float(row.open),
            close=float(row.close),
            ret=float(row.ret),
            month=int(row.month),
            day_of_month=int(row.day_of_month)
        )
        for row in daily.rename(columns={'return': 'ret'}).itertuples(index=False)
    ]


def add_calendar_features(daily: pd.DataFrame) -> pd.DataFrame:
    """Add cyclical month and day-of-month encodings."""
    df = daily.copy()

    df['month_sin'] = np.sin(2 * np.pi * (df['month'] - 1) / 12)
    df['month_cos'] = np.cos(2 * np.pi * (df['month'] - 1) / 12)
    df['dom_sin'] = np.sin(2 * np.pi * (df['day_of_month'] - 1) / 31)
    df['dom_cos'] = np.cos(2 * np.pi * (df['day_of_month'] - 1) / 31)

    return df
