"""Decision policies producing one buy/skip flag per day."""

from typing import Optional

import numpy as np

from daily_system.core.errors import InvalidInputError


def baseline_decisions(
    window_returns,
    seed_return: Optional[float] = None
) -> np.ndarray:
    """
    Lag-1 rule: buy day i when day i-1 closed up.

    Args:
        window_returns: Returns of the evaluation window, in order
        seed_return: Return of the day before the window. None means no
            look-back is available and the first day is skipped.

    Returns:
        Boolean decision vector, same length as window_returns
    """
    returns = np.asarray(window_returns, dtype=float)
    if returns.ndim != 1:
        raise InvalidInputError(f"window_returns must be 1-D, got shape {returns.shape}")

    decisions = np.zeros(len(returns), dtype=bool)
    if len(returns) == 0:
        return decisions

    decisions[0] = seed_return is not None and seed_return > 0
    decisions[1:] = returns[:-1] > 0
    return decisions


def threshold_decisions(proba, threshold: float = 0.0) -> np.ndarray:
    """
    Buy when prob_up - prob_down > threshold.

    Threshold 0 is plain argmax; a positive threshold only keeps confident
    "up" calls.

    Args:
        proba: (n, 2) array of (prob_down, prob_up) or 1-D array of prob_up
        threshold: Margin in [-1, 1]

    Returns:
        Boolean decision vector of length n
    """
    if not -1.0 <= threshold <= 1.0:
        raise InvalidInputError(f"threshold must be in [-1, 1], got {threshold}")

    proba = np.asarray(proba, dtype=float)

    if proba.ndim == 1:
        prob_up = proba
        prob_down = 1.0 - proba
    elif proba.ndim == 2 and proba.shape[1] == 2:
        prob_down = proba[:, 0]
        prob_up = proba[:, 1]
    else:
        raise InvalidInputError(
            f"proba must be 1-D or (n, 2), got shape {proba.shape}"
        )

    if np.isnan(proba).any() or (proba < 0).any() or (proba > 1).any():
        raise InvalidInputError("Probabilities must lie in [0, 1]")

    return (prob_up - prob_down) > threshold


def always_long_decisions(n: int) -> np.ndarray:
    """Buy-and-hold reference: a position every day."""
    if n < 0:
        raise InvalidInputError(f"n must be >= 0, got {n}")
    return np.ones(n, dtype=bool)
