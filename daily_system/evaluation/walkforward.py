"""Walk-forward cross-validation with purging and embargo."""

import numpy as np
import pandas as pd
from typing import List, Tuple


class WalkForwardCV:
    """Walk-forward time-series cross-validation over daily samples."""

    def __init__(
        self,
        n_folds: int = 5,
        embargo_days: int = 0,
        purge_days: int = 0,
        min_train: int = 40,
        min_val: int = 10
    ):
        """
        Initialize walk-forward CV.

        Args:
            n_folds: Number of folds
            embargo_days: Days dropped from the end of each validation block
            purge_days: Days dropped between train and validation
            min_train: Smallest training set a fold may have
            min_val: Smallest validation set a fold may have
        """
        self.n_folds = n_folds
        self.embargo_days = embargo_days
        self.purge_days = purge_days
        self.min_train = min_train
        self.min_val = min_val

    def split(self, n_samples: int) -> List[Tuple[np.ndarray, np.ndarray]]:
        """
        Create walk-forward splits.

        Args:
            n_samples: Number of chronologically ordered samples

        Returns:
            List of (train_indices, val_indices) tuples
        """
        fold_size = n_samples // (self.n_folds + 1)

        splits = []
        if fold_size == 0:
            return splits

        for fold_idx in range(self.n_folds):
            # Validation window
            val_start = (fold_idx + 1) * fold_size
            val_end = val_start + fold_size

            if val_end > n_samples:
                break

            # Train: all data before validation (with purge)
            train_end = val_start - self.purge_days
            train_indices = np.arange(0, max(0, train_end))

            # Validation: with embargo at the end
            val_indices = np.arange(val_start, val_end - self.embargo_days)

            if len(train_indices) >= self.min_train and len(val_indices) >= self.min_val:
                splits.append((train_indices, val_indices))

        return splits

    def get_fold_dates(
        self,
        dates: pd.Series,
        splits: List[Tuple[np.ndarray, np.ndarray]]
    ) -> List[dict]:
        """Get date ranges for each fold, dates aligned with sample indices."""
        fold_info = []

        for i, (train_idx, val_idx) in enumerate(splits):
            info = {
                'fold': i + 1,
                'train_start': dates.iloc[train_idx[0]],
                'train_end': dates.iloc[train_idx[-1]],
                'val_start': dates.iloc[val_idx[0]],
                'val_end': dates.iloc[val_idx[-1]],
                'n_train': len(train_idx),
                'n_val': len(val_idx)
            }
            fold_info.append(info)

        return fold_info
