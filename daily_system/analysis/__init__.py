"""Exploratory statistics: seasonality and return distributions."""

from .seasonality import (
    monthly_seasonality,
    day_of_month_seasonality,
    weekday_seasonality,
    return_distribution,
    return_histogram
)

__all__ = [
    "monthly_seasonality", "day_of_month_seasonality", "weekday_seasonality",
    "return_distribution", "return_histogram"
]
