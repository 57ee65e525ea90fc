"""Test the compounding backtest evaluator."""

from datetime import date

import numpy as np
import pandas as pd
import pytest

from daily_system.core.errors import InvalidInputError, DimensionMismatchError
from daily_system.core.types import DailyRecord
from daily_system.evaluation.backtest import evaluate_backtest, equity_curve


def _window(returns):
    return pd.DataFrame({
        'date': pd.date_range('2017-06-01', periods=len(returns), freq='D').date,
        'open': 1.0,
        'close': [1.0 + r for r in returns],
        'return': returns,
        'month': 6,
        'day_of_month': range(1, len(returns) + 1)
    })


def test_selected_days_compound():
    profit = evaluate_backtest([True, False, True], _window([0.01, -0.02, 0.03]), principal=1000)

    assert profit == pytest.approx(40.3)


def test_integer_decisions_accepted():
    profit = evaluate_backtest(np.array([1, 0, 1]), [0.01, -0.02, 0.03])

    assert profit == pytest.approx(40.3)


def test_all_false_is_zero_profit():
    returns = [0.05, -0.03, 0.02, 0.01]

    for principal in [1.0, 1000.0, 123456.0]:
        assert evaluate_backtest([False] * 4, returns, principal) == 0.0


def test_all_true_matches_product():
    returns = np.array([0.01, -0.005, 0.02, -0.03, 0.004])
    principal = 2500.0

    profit = evaluate_backtest([True] * 5, _window(list(returns)), principal)

    assert profit == pytest.approx(principal * np.prod(1 + returns) - principal)


def test_loss_is_negative():
    assert evaluate_backtest([True, True], [-0.1, -0.1]) == pytest.approx(1000 * 0.81 - 1000)


def test_daily_record_window():
    records = [
        DailyRecord(date(2017, 1, 2), 1.0, 1.01, 0.01, 1, 2),
        DailyRecord(date(2017, 1, 3), 1.0, 0.98, -0.02, 1, 3),
    ]

    assert evaluate_backtest([False, True], records) == pytest.approx(-20.0)


def test_series_window_with_offset_index():
    returns = pd.Series([0.01, 0.02], index=[10, 11])

    assert evaluate_backtest([True, True], returns) == pytest.approx(1000 * 1.01 * 1.02 - 1000)


def test_length_mismatch_raises():
    with pytest.raises(DimensionMismatchError):
        evaluate_backtest([True, False, True], _window([0.01] * 5))


@pytest.mark.parametrize('principal', [0, -100.0])
def test_non_positive_principal_raises(principal):
    with pytest.raises(InvalidInputError):
        evaluate_backtest([True], [0.01], principal=principal)


@pytest.mark.parametrize('bad', [np.nan, np.inf, -np.inf])
def test_non_finite_returns_raise(bad):
    with pytest.raises(InvalidInputError):
        evaluate_backtest([True], [bad])

    with pytest.raises(InvalidInputError):
        equity_curve([True, False], _window([0.01, bad]))


@pytest.mark.parametrize('principal', ['abc', None, float('nan'), float('inf')])
def test_non_numeric_principal_raises(principal):
    with pytest.raises(InvalidInputError):
        evaluate_backtest([True], [0.01], principal=principal)


def test_numeric_string_principal_is_coerced():
    assert evaluate_backtest([True], [0.1], principal='1000') == pytest.approx(
        evaluate_backtest([True], [0.1], principal=1000.0)
    )


def test_non_binary_decisions_raise():
    with pytest.raises(InvalidInputError):
        evaluate_backtest([2, 0], [0.01, 0.02])


def test_empty_window_is_zero_profit():
    assert evaluate_backtest([], []) == 0.0


def test_equity_curve_holds_capital_on_skipped_days():
    curve = equity_curve([True, False, True], [0.10, 0.50, -0.10], principal=100)

    assert curve == pytest.approx([110.0, 110.0, 99.0])


def test_equity_curve_ends_at_profit():
    returns = [0.01, -0.02, 0.03, 0.005]
    decisions = [True, True, False, True]

    curve = equity_curve(decisions, returns, principal=1000)

    assert curve[-1] - 1000 == pytest.approx(evaluate_backtest(decisions, returns, 1000))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
