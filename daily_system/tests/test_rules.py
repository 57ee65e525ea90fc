"""Test decision policies."""

import numpy as np
import pytest

from daily_system.core.errors import InvalidInputError
from daily_system.strategies.rules import (
    baseline_decisions, threshold_decisions, always_long_decisions
)


def test_baseline_is_previous_day_up():
    returns = [0.01, -0.02, 0.0, 0.03]

    decisions = baseline_decisions(returns, seed_return=-0.01)

    assert decisions.tolist() == [False, True, False, False]


def test_baseline_seed_drives_first_day():
    assert baseline_decisions([0.01, 0.02], seed_return=0.005).tolist() == [True, True]


def test_baseline_without_seed_skips_first_day():
    assert baseline_decisions([0.01, 0.02], seed_return=None).tolist() == [False, True]


def test_baseline_empty_window():
    assert len(baseline_decisions([], seed_return=0.01)) == 0


def test_threshold_zero_is_argmax():
    proba = np.array([[0.7, 0.3], [0.4, 0.6], [0.5, 0.5]])

    decisions = threshold_decisions(proba, 0.0)

    assert decisions.tolist() == [False, True, False]
    assert decisions.tolist() == (np.argmax(proba, axis=1) == 1).tolist()


def test_positive_threshold_requires_margin():
    proba = np.array([[0.45, 0.55], [0.3, 0.7], [0.1, 0.9]])

    assert threshold_decisions(proba, 0.2).tolist() == [False, True, True]
    assert threshold_decisions(proba, 0.5).tolist() == [False, False, True]


def test_one_dimensional_prob_up():
    prob_up = np.array([0.55, 0.62, 0.4])

    assert threshold_decisions(prob_up, 0.2).tolist() == [False, True, False]


def test_negative_threshold_buys_more():
    proba = np.array([[0.55, 0.45]])

    assert threshold_decisions(proba, -0.2).tolist() == [True]


@pytest.mark.parametrize('threshold', [-1.5, 1.01])
def test_threshold_out_of_range_raises(threshold):
    with pytest.raises(InvalidInputError):
        threshold_decisions(np.array([[0.5, 0.5]]), threshold)


def test_invalid_probabilities_raise():
    with pytest.raises(InvalidInputError):
        threshold_decisions(np.array([[1.2, -0.2]]))

    with pytest.raises(InvalidInputError):
        threshold_decisions(np.ones((2, 3)) / 3)


def test_always_long():
    assert always_long_decisions(3).tolist() == [True, True, True]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
