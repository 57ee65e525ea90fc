"""Base model interface and utilities."""

from typing import Optional
from abc import ABC, abstractmethod
import numpy as np
from sklearn.preprocessing import StandardScaler

from daily_system.core.errors import InvalidInputError


class BaseModel(ABC):
    """
    Base interface for direction classifiers.

    X is a (samples, lookback, features) sequence array. predict_proba
    returns (samples, 2) columns (prob_down, prob_up).
    """

    n_classes = 2

    def __init__(self):
        self.scaler = StandardScaler()
        self.is_fitted = False

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray, X_val: Optional[np.ndarray] = None,
            y_val: Optional[np.ndarray] = None):
        """Train the model."""
        pass

    @abstractmethod
    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Predict class probabilities."""
        pass

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict class labels (argmax)."""
        proba = self.predict_proba(X)
        return np.argmax(proba, axis=1)

    def _check_training_data(self, X: np.ndarray, y: np.ndarray):
        if X.ndim != 3:
            raise InvalidInputError(f"X must be (samples, lookback, features), got shape {X.shape}")
        if len(X) != len(y):
            raise InvalidInputError(f"X has {len(X)} samples but y has {len(y)}")
        if len(np.unique(y)) < 2:
            raise InvalidInputError("Training labels contain a single class")

    def _check_fitted(self):
        if not self.is_fitted:
            raise ValueError("Model not fitted yet")

    def _scale(self, X: np.ndarray, fit: bool = False) -> np.ndarray:
        """Standardize per feature across all time steps."""
        n, steps, n_features = X.shape
        flat = X.reshape(-1, n_features)
        flat = self.scaler.fit_transform(flat) if fit else self.scaler.transform(flat)
        return flat.reshape(n, steps, n_features).astype(np.float32)


def balanced_class_weights(y: np.ndarray) -> np.ndarray:
    """Per-class weights n / (n_classes * count)."""
    class_counts = np.bincount(y.astype(int), minlength=2)
    class_counts = np.maximum(class_counts, 1)
    return len(y) / (len(class_counts) * class_counts)
