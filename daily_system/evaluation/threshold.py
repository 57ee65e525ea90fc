"""Decision threshold sweep over classifier probabilities."""

from typing import Iterable

import numpy as np
import pandas as pd

from daily_system.core.errors import InvalidInputError, DimensionMismatchError
from daily_system.strategies.rules import threshold_decisions
from .backtest import evaluate_backtest, window_returns, as_principal, DEFAULT_PRINCIPAL


def sweep_thresholds(
    proba: np.ndarray,
    window,
    thresholds: Iterable[float],
    principal: float = DEFAULT_PRINCIPAL
) -> pd.DataFrame:
    """
    Backtest the threshold rule at each threshold.

    Args:
        proba: (n, 2) or 1-D prob_up array aligned with window
        window: Evaluation window
        thresholds: Margins to try
        principal: Starting capital

    Returns:
        DataFrame with threshold, trades, profit, return_pct, precision_up
        (share of bought days that closed up), one row per threshold
    """
    returns = window_returns(window)
    principal = as_principal(principal)
    if len(proba) != len(returns):
        raise DimensionMismatchError(len(returns), len(proba), what="probabilities")

    thresholds = list(thresholds)
    if not thresholds:
        raise InvalidInputError("No thresholds to sweep")

    rows = []
    for threshold in thresholds:
        decisions = threshold_decisions(proba, threshold)
        profit = evaluate_backtest(decisions, returns, principal)
        n_trades = int(decisions.sum())
        precision = float((returns[decisions] > 0).mean()) if n_trades else 0.0

        rows.append({
            'threshold': float(threshold),
            'trades': n_trades,
            'profit': float(profit),
            'return_pct': float(profit / principal * 100),
            'precision_up': precision
        })

    return pd.DataFrame(rows)


def best_threshold(sweep: pd.DataFrame) -> float:
    """Threshold with the highest profit; ties go to the smallest threshold."""
    if len(sweep) == 0:
        raise InvalidInputError("Empty threshold sweep")
    ordered = sweep.sort_values(['profit', 'threshold'], ascending=[False, True])
    return float(ordered.iloc[0]['threshold'])
