"""Binary direction labels."""

import numpy as np
import pandas as pd

UP = 1
DOWN = 0


def direction_labels(daily: pd.DataFrame) -> np.ndarray:
    """1 where the day's return is positive, else 0 (flat days count as down)."""
    if 'return' not in daily.columns:
        raise ValueError("No 'return' column found. Run aggregate_daily first.")
    return (daily['return'].to_numpy() > 0).astype(int)


def get_label_distribution(labels: np.ndarray) -> dict:
    """Get label distribution statistics."""
    total = len(labels)
    up_count = int(np.sum(labels == UP))
    down_count = total - up_count

    return {
        'total': total,
        'up_count': up_count,
        'up_pct': float(up_count / total * 100) if total else 0.0,
        'down_count': down_count,
        'down_pct': float(down_count / total * 100) if total else 0.0
    }
