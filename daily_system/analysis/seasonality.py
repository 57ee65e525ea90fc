"""Seasonality and return distribution statistics for daily records."""

from typing import Dict

import numpy as np
import pandas as pd

from daily_system.core.errors import InvalidInputError

WEEKDAY_NAMES = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']


def _check_daily(daily: pd.DataFrame):
    if daily is None or len(daily) == 0:
        raise InvalidInputError("No daily records")
    if 'return' not in daily.columns:
        raise InvalidInputError("No 'return' column found")


def _bucket_stats(daily: pd.DataFrame, key) -> pd.DataFrame:
    grouped = daily.groupby(key)['return']
    stats = pd.DataFrame({
        'mean_return': grouped.mean(),
        'median_return': grouped.median(),
        'std_return': grouped.std(),
        'count': grouped.count(),
        'pct_positive': grouped.apply(lambda r: float((r > 0).mean() * 100))
    })
    stats['count'] = stats['count'].astype(int)
    return stats


def monthly_seasonality(daily: pd.DataFrame) -> pd.DataFrame:
    """Return statistics per calendar month (index: month 1-12)."""
    _check_daily(daily)
    return _bucket_stats(daily, 'month')


def day_of_month_seasonality(daily: pd.DataFrame) -> pd.DataFrame:
    """Return statistics per day of month (index: 1-31)."""
    _check_daily(daily)
    return _bucket_stats(daily, 'day_of_month')


def weekday_seasonality(daily: pd.DataFrame) -> pd.DataFrame:
    """Return statistics per weekday, indexed by short weekday name."""
    _check_daily(daily)
    df = daily.copy()
    df['weekday'] = [d.weekday() for d in pd.to_datetime(df['date'])]
    stats = _bucket_stats(df, 'weekday')
    stats.index = [WEEKDAY_NAMES[i] for i in stats.index]
    stats.index.name = 'weekday'
    return stats


def return_distribution(daily: pd.DataFrame) -> Dict:
    """
    Summary statistics of daily returns.

    Returns:
        Dictionary with count, mean, std, skew, kurtosis (excess), min, max,
        5/25/50/75/95th percentiles and pct_positive
    """
    _check_daily(daily)
    returns = daily['return'].astype(float)

    quantiles = returns.quantile([0.05, 0.25, 0.5, 0.75, 0.95])

    def _f(value) -> float:
        return float(value) if pd.notna(value) else 0.0

    return {
        'count': int(len(returns)),
        'mean': _f(returns.mean()),
        'std': _f(returns.std()),
        'skew': _f(returns.skew()),
        'kurtosis': _f(returns.kurt()),
        'min': _f(returns.min()),
        'max': _f(returns.max()),
        'q05': _f(quantiles.loc[0.05]),
        'q25': _f(quantiles.loc[0.25]),
        'median': _f(quantiles.loc[0.5]),
        'q75': _f(quantiles.loc[0.75]),
        'q95': _f(quantiles.loc[0.95]),
        'pct_positive': float((returns > 0).mean() * 100)
    }


def return_histogram(daily: pd.DataFrame, bins: int = 20) -> pd.DataFrame:
    """Histogram of daily returns as a (bin_left, bin_right, count) frame."""
    _check_daily(daily)
    if bins < 1:
        raise InvalidInputError(f"bins must be >= 1, got {bins}")

    counts, edges = np.histogram(daily['return'].astype(float), bins=bins)
    return pd.DataFrame({
        'bin_left': edges[:-1],
        'bin_right': edges[1:],
        'count': counts
    })
