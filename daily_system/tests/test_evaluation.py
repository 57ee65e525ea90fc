"""Test metrics, threshold sweep and walk-forward splits."""

import numpy as np
import pandas as pd
import pytest

from daily_system.core.errors import DimensionMismatchError, InvalidInputError
from daily_system.evaluation.backtest import evaluate_backtest
from daily_system.evaluation.metrics import calculate_metrics, classification_metrics
from daily_system.evaluation.threshold import sweep_thresholds, best_threshold
from daily_system.evaluation.walkforward import WalkForwardCV
from daily_system.strategies.rules import threshold_decisions


def test_calculate_metrics_basic():
    returns = np.array([0.01, -0.02, 0.03, -0.01])
    decisions = [True, False, True, True]

    metrics = calculate_metrics(decisions, returns, principal=1000)

    assert metrics['total_trades'] == 3
    assert metrics['win_count'] == 2
    assert metrics['loss_count'] == 1
    assert metrics['profit'] == pytest.approx(evaluate_backtest(decisions, returns, 1000))
    assert metrics['win_rate'] == pytest.approx(200 / 3)
    assert metrics['profit_factor'] == pytest.approx(0.04 / 0.01)
    assert metrics['buy_and_hold_profit'] == pytest.approx(1000 * np.prod(1 + returns) - 1000)
    # Peak 1040.3, then 1029.897
    assert metrics['max_drawdown_pct'] == pytest.approx(1.0)


def test_calculate_metrics_no_trades():
    metrics = calculate_metrics([False, False], [0.01, 0.02])

    assert metrics['total_trades'] == 0
    assert metrics['profit'] == 0.0
    assert metrics['buy_and_hold_profit'] == pytest.approx(1000 * 1.01 * 1.02 - 1000)


def test_classification_metrics():
    metrics = classification_metrics(np.array([1, 0, 1, 1]), np.array([1, 1, 0, 1]))

    assert metrics['accuracy'] == 0.5
    assert metrics['precision_up'] == pytest.approx(2 / 3)
    assert metrics['recall_up'] == pytest.approx(2 / 3)
    assert metrics['false_positive'] == 1
    assert metrics['false_negative'] == 1


def test_sweep_matches_evaluator():
    proba = np.array([[0.4, 0.6], [0.45, 0.55], [0.2, 0.8], [0.7, 0.3]])
    returns = pd.Series([0.01, -0.02, 0.03, 0.05])

    sweep = sweep_thresholds(proba, returns, [0.0, 0.15, 0.5], principal=1000)

    assert list(sweep['threshold']) == [0.0, 0.15, 0.5]
    for _, row in sweep.iterrows():
        expected = evaluate_backtest(threshold_decisions(proba, row['threshold']), returns, 1000)
        assert row['profit'] == pytest.approx(expected)
    assert sweep['trades'].tolist() == [3, 2, 1]
    assert best_threshold(sweep) == 0.15


def test_sweep_length_mismatch():
    with pytest.raises(DimensionMismatchError):
        sweep_thresholds(np.array([[0.5, 0.5]]), [0.01, 0.02], [0.0])


def test_metrics_and_sweep_reject_bad_principal():
    returns = np.array([0.01, -0.02])
    proba = np.array([[0.2, 0.8], [0.6, 0.4]])

    with pytest.raises(InvalidInputError):
        calculate_metrics([True, False], returns, principal='abc')
    with pytest.raises(InvalidInputError):
        sweep_thresholds(proba, returns, [0.0], principal=None)


def test_metrics_reject_non_finite_returns():
    with pytest.raises(InvalidInputError):
        calculate_metrics([True, True], np.array([0.01, np.nan]))


def test_walkforward_train_before_val():
    cv = WalkForwardCV(n_folds=4, purge_days=2, embargo_days=1, min_train=5, min_val=3)

    splits = cv.split(100)

    assert len(splits) == 4
    for train_idx, val_idx in splits:
        assert train_idx.max() < val_idx.min()
        assert val_idx.min() - train_idx.max() > 2


def test_walkforward_respects_minimums():
    cv = WalkForwardCV(n_folds=5, min_train=40, min_val=10)

    splits = cv.split(60)

    assert all(len(train) >= 40 for train, _ in splits)
    assert WalkForwardCV(n_folds=5).split(3) == []


def test_fold_dates():
    cv = WalkForwardCV(n_folds=2, min_train=5, min_val=5)
    dates = pd.Series(pd.date_range('2017-01-01', periods=30, freq='D'))

    info = cv.get_fold_dates(dates, cv.split(30))

    assert info[0]['train_start'] == pd.Timestamp('2017-01-01')
    assert info[0]['val_start'] == pd.Timestamp('2017-01-11')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
