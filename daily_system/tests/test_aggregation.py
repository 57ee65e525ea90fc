"""Test daily aggregation of ticks."""

from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from daily_system.core.errors import InvalidInputError
from daily_system.core.types import Tick, DailyRecord
from daily_system.features.daily import (
    aggregate_daily, to_daily_records, add_calendar_features, DAILY_COLUMNS
)
from daily_system.io.dataset import ticks_to_frame


def test_open_close_from_first_and_last_tick():
    """00:00 tick opens the day, 23:59 tick closes it."""
    ticks = ticks_to_frame([
        Tick(datetime(2017, 1, 2, 0, 0), open=1.20, close=1.20),
        Tick(datetime(2017, 1, 2, 23, 59), open=1.19, close=1.21),
    ])

    daily = aggregate_daily(ticks)

    assert len(daily) == 1
    assert list(daily.columns) == DAILY_COLUMNS
    row = daily.iloc[0]
    assert row['date'] == date(2017, 1, 2)
    assert row['open'] == pytest.approx(1.20)
    assert row['close'] == pytest.approx(1.21)
    assert row['return'] == pytest.approx(1.21 / 1.20 - 1)
    assert row['month'] == 1
    assert row['day_of_month'] == 2


def test_single_tick_day_has_zero_return():
    ticks = pd.DataFrame({
        'timestamp': pd.to_datetime(['2017-03-05 12:00:00']),
        'open': [1.05],
        'close': [1.07]
    })

    daily = aggregate_daily(ticks)

    assert len(daily) == 1
    assert daily.iloc[0]['open'] == daily.iloc[0]['close']
    assert daily.iloc[0]['return'] == 0.0


def test_unordered_ticks_use_earliest_and_latest():
    ticks = pd.DataFrame({
        'timestamp': pd.to_datetime([
            '2017-01-03 12:00:00', '2017-01-02 23:00:00', '2017-01-03 00:01:00',
            '2017-01-02 00:05:00', '2017-01-03 23:58:00'
        ]),
        'open': [1.0, 1.0, 1.0, 1.0, 1.0],
        'close': [1.11, 1.22, 1.10, 1.20, 1.12]
    })

    daily = aggregate_daily(ticks)

    assert list(daily['date']) == [date(2017, 1, 2), date(2017, 1, 3)]
    assert list(daily['open']) == [1.20, 1.10]
    assert list(daily['close']) == [1.22, 1.12]


def test_one_record_per_date_ascending():
    timestamps = pd.date_range('2017-01-02', periods=3 * 24 * 60, freq='1min')
    prices = np.linspace(1.0, 1.3, len(timestamps))
    ticks = pd.DataFrame({'timestamp': timestamps, 'open': prices, 'close': prices})

    daily = aggregate_daily(ticks)

    assert len(daily) == 3
    assert daily['date'].is_monotonic_increasing
    for i, day in enumerate(daily['date']):
        group = ticks[ticks['timestamp'].dt.date == day]
        assert daily['open'].iloc[i] == group['close'].iloc[0]
        assert daily['close'].iloc[i] == group['close'].iloc[-1]


def test_input_frame_not_modified():
    ticks = pd.DataFrame({
        'timestamp': pd.to_datetime(['2017-01-02 10:00', '2017-01-02 09:00']),
        'open': [1.1, 1.2],
        'close': [1.1, 1.2]
    })
    before = ticks.copy()

    aggregate_daily(ticks)

    pd.testing.assert_frame_equal(ticks, before)


def test_empty_ticks_raise():
    with pytest.raises(InvalidInputError):
        aggregate_daily(pd.DataFrame(columns=['timestamp', 'open', 'close']))


@pytest.mark.parametrize('col,value', [('open', 0.0), ('close', -1.0), ('close', np.nan), ('close', np.inf), ('open', -np.inf)])
def test_non_positive_price_raises(col, value):
    ticks = pd.DataFrame({
        'timestamp': pd.to_datetime(['2017-01-02 00:00', '2017-01-02 00:01']),
        'open': [1.1, 1.1],
        'close': [1.1, 1.1]
    })
    ticks.loc[1, col] = value

    with pytest.raises(InvalidInputError):
        aggregate_daily(ticks)


def test_missing_column_raises():
    ticks = pd.DataFrame({'timestamp': pd.to_datetime(['2017-01-02']), 'close': [1.1]})

    with pytest.raises(InvalidInputError):
        aggregate_daily(ticks)


def test_to_daily_records():
    ticks = pd.DataFrame({
        'timestamp': pd.to_datetime(['2017-02-01 00:00', '2017-02-01 23:59', '2017-02-02 00:00']),
        'open': [1.0, 1.0, 1.0],
        'close': [1.00, 1.02, 1.03]
    })

    records = to_daily_records(aggregate_daily(ticks))

    assert len(records) == 2
    assert isinstance(records[0], DailyRecord)
    assert records[0].ret == pytest.approx(0.02)
    assert records[1].ret == 0.0
    assert records[1].to_dict()['return'] == 0.0


def test_calendar_features_are_cyclical():
    daily = pd.DataFrame({'month': [1, 7], 'day_of_month': [1, 16], 'return': [0.0, 0.0]})

    feats = add_calendar_features(daily)

    assert feats['month_sin'].iloc[0] == pytest.approx(0.0)
    assert feats['month_cos'].iloc[0] == pytest.approx(1.0)
    assert feats['month_cos'].iloc[1] == pytest.approx(-1.0)
    assert 'month_sin' not in daily.columns


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
