"""Compounding all-in/all-out backtest over daily returns."""

import numpy as np
import pandas as pd

from daily_system.core.errors import InvalidInputError, DimensionMismatchError
from daily_system.core.types import DailyRecord

DEFAULT_PRINCIPAL = 1000.0


def window_returns(window) -> np.ndarray:
    """
    Extract returns from an evaluation window.

    Accepts a daily frame (its 'return' column), a sequence of DailyRecord,
    or an array-like of returns.
    """
    if isinstance(window, pd.DataFrame):
        if 'return' not in window.columns:
            raise InvalidInputError("Evaluation window has no 'return' column")
        returns = window['return'].to_numpy(dtype=float)
    elif isinstance(window, pd.Series):
        returns = window.to_numpy(dtype=float)
    elif len(window) > 0 and isinstance(window[0], DailyRecord):
        returns = np.array([record.ret for record in window], dtype=float)
    else:
        returns = np.asarray(window, dtype=float)

    if returns.ndim != 1:
        raise InvalidInputError(f"Evaluation window must be 1-D, got shape {returns.shape}")
    if not np.isfinite(returns).all():
        raise InvalidInputError("Evaluation window contains NaN or infinite returns")
    return returns


def as_decisions(decisions) -> np.ndarray:
    """Validate a decision vector of bools or {0, 1} and return it as bool."""
    arr = np.asarray(decisions)
    if arr.ndim != 1:
        raise InvalidInputError(f"Decisions must be 1-D, got shape {arr.shape}")
    if arr.dtype == bool:
        return arr
    if arr.size and not np.isin(arr, [0, 1]).all():
        raise InvalidInputError("Decisions must be booleans or 0/1")
    return arr.astype(bool)


def _validated(decisions, window, principal: float):
    returns = window_returns(window)
    if len(decisions) != len(returns):
        raise DimensionMismatchError(len(returns), len(decisions))
    return as_decisions(decisions), returns, as_principal(principal)


def as_principal(principal) -> float:
    """Validate starting capital: a finite number > 0."""
    try:
        capital = float(principal)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"principal must be a number, got {principal!r}") from e
    if not capital > 0 or not np.isfinite(capital):
        raise InvalidInputError(f"principal must be > 0, got {principal}")
    return capital


def evaluate_backtest(decisions, window, principal: float = DEFAULT_PRINCIPAL) -> float:
    """
    Profit from holding a full position on the days marked buy.

    profit = principal * prod(1 + r[i] for buy days i) - principal

    decision[i] pairs with window[i] and factors multiply in index order.
    Skipped days contribute nothing.

    Args:
        decisions: Bool / 0-1 vector, one entry per window day
        window: Daily frame, DailyRecord list, or returns
        principal: Starting capital (> 0)

    Returns:
        Signed profit (negative is a loss)
    """
    mask, returns, principal = _validated(decisions, window, principal)

    capital = principal
    for ret in returns[mask]:
        capital *= 1.0 + ret

    return capital - principal


def equity_curve(decisions, window, principal: float = DEFAULT_PRINCIPAL) -> np.ndarray:
    """Capital at the close of each window day."""
    mask, returns, principal = _validated(decisions, window, principal)
    factors = np.where(mask, 1.0 + returns, 1.0)
    return principal * np.cumprod(factors)
