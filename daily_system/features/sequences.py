"""Sliding-window sequences for the recurrent classifier."""

from typing import List, Tuple

import numpy as np
import pandas as pd

from daily_system.core.errors import InvalidInputError
from daily_system.labels.direction import direction_labels


def build_sequences(
    daily: pd.DataFrame,
    lookback: int,
    feature_cols: List[str]
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Build (samples, lookback, features) windows.

    The window for target day t covers days t-lookback .. t-1, so a sample
    never sees the target day itself.

    Args:
        daily: Daily frame with feature_cols and 'return'
        lookback: Days per window
        feature_cols: Columns used as per-day features

    Returns:
        (X, y, positions) where positions are row positions of target days
    """
    if lookback < 1:
        raise InvalidInputError(f"lookback must be >= 1, got {lookback}")

    missing = [col for col in feature_cols if col not in daily.columns]
    if missing:
        raise InvalidInputError(f"Missing feature columns: {missing}")

    n = len(daily)
    if n <= lookback:
        raise InvalidInputError(
            f"Need more than {lookback} daily records to build sequences, got {n}"
        )

    values = daily[feature_cols].to_numpy(dtype=np.float32)
    labels = direction_labels(daily)

    positions = np.arange(lookback, n)
    X = np.stack([values[t - lookback:t] for t in positions])
    y = labels[positions]

    return X, y, positions


def split_sequences(
    X: np.ndarray,
    y: np.ndarray,
    positions: np.ndarray,
    split_idx: int
) -> Tuple[Tuple[np.ndarray, np.ndarray], Tuple[np.ndarray, np.ndarray]]:
    """
    Split sequences by target position.

    Targets before split_idx go to training, the rest to evaluation. Windows
    of the first evaluation days reach back into the training window.
    """
    train_mask = positions < split_idx
    return (X[train_mask], y[train_mask]), (X[~train_mask], y[~train_mask])
