"""Ensemble classifier on flattened look-back windows."""

import numpy as np
import lightgbm as lgb
import xgboost as xgb
from sklearn.linear_model import LogisticRegression
from typing import Optional

from daily_system.core.errors import InvalidInputError
from .base import BaseModel, balanced_class_weights


class EnsembleClassifier(BaseModel):
    """
    Ensemble of LightGBM, XGBoost, and Logistic Regression.

    Each window of (lookback, features) is flattened into one row.
    Probabilities are blended by weighted average.
    """

    def __init__(
        self,
        weights: Optional[dict] = None,
        random_state: int = 42
    ):
        """
        Initialize ensemble.

        Args:
            weights: Dict with 'lgb', 'xgb', 'linear' weights
            random_state: Seed for all members
        """
        super().__init__()
        self.weights = weights or {'lgb': 0.40, 'xgb': 0.40, 'linear': 0.20}
        missing = [name for name in ['lgb', 'xgb', 'linear'] if name not in self.weights]
        if missing:
            raise InvalidInputError(f"Missing ensemble weights: {missing}")
        self.random_state = random_state
        self.models = {}

    @staticmethod
    def _flatten(X: np.ndarray) -> np.ndarray:
        return X.reshape(len(X), -1)

    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        X_val: Optional[np.ndarray] = None,
        y_val: Optional[np.ndarray] = None
    ):
        """Train all ensemble members."""
        self._check_training_data(X, y)
        y = np.asarray(y).astype(int)

        X_flat = self._flatten(X)
        X_scaled = self._flatten(self._scale(X, fit=True))
        sample_weight = balanced_class_weights(y)[y]

        # Small daily datasets: shallow trees, few rounds
        self.models['lgb'] = lgb.LGBMClassifier(
            n_estimators=50,
            max_depth=3,
            learning_rate=0.1,
            num_leaves=7,
            subsample=0.8,
            colsample_bytree=0.8,
            reg_alpha=1.0,
            reg_lambda=2.0,
            min_child_samples=5,
            random_state=self.random_state,
            verbosity=-1,
            force_row_wise=True
        )
        self.models['lgb'].fit(X_flat, y, sample_weight=sample_weight)

        self.models['xgb'] = xgb.XGBClassifier(
            n_estimators=50,
            max_depth=3,
            learning_rate=0.1,
            subsample=0.8,
            colsample_bytree=0.8,
            gamma=0.5,
            reg_alpha=1.0,
            reg_lambda=2.0,
            min_child_weight=1,
            random_state=self.random_state,
            verbosity=0
        )
        self.models['xgb'].fit(X_flat, y, sample_weight=sample_weight, verbose=False)

        self.models['linear'] = LogisticRegression(
            C=0.1,
            max_iter=500,
            class_weight='balanced',
            random_state=self.random_state
        )
        self.models['linear'].fit(X_scaled, y)

        self.is_fitted = True
        return self

    def _get_base_predictions(self, X: np.ndarray) -> np.ndarray:
        """Concatenated member probabilities."""
        X_flat = self._flatten(X)
        X_scaled = self._flatten(self._scale(X))

        preds = []
        for name in ['lgb', 'xgb', 'linear']:
            features = X_scaled if name == 'linear' else X_flat
            preds.append(self.models[name].predict_proba(features))

        return np.hstack(preds)

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Predict (prob_down, prob_up)."""
        self._check_fitted()

        base = self._get_base_predictions(X)
        total_weight = sum(self.weights[name] for name in ['lgb', 'xgb', 'linear'])
        blended = np.zeros((len(X), self.n_classes))
        for i, name in enumerate(['lgb', 'xgb', 'linear']):
            blended += base[:, 2 * i:2 * i + 2] * self.weights[name]

        return blended / total_weight

    def get_feature_importance(self, feature_names: list) -> dict:
        """Average tree importance per flattened feature (name@lag)."""
        importance = (
            self.models['lgb'].feature_importances_ / max(self.models['lgb'].feature_importances_.sum(), 1)
            + self.models['xgb'].feature_importances_
        ) / 2
        lookback = len(importance) // len(feature_names)
        names = [
            f"{name}@t-{lookback - step}"
            for step in range(lookback)
            for name in feature_names
        ]
        return dict(zip(names, importance))
