"""End-to-end research run: ticks -> daily records -> baseline and classifier backtests."""

import logging
from typing import Dict, Optional

import numpy as np
import pandas as pd

from daily_system.analysis.seasonality import (
    monthly_seasonality, weekday_seasonality, return_distribution
)
from daily_system.core.errors import InvalidInputError
from daily_system.evaluation.metrics import calculate_metrics, classification_metrics
from daily_system.evaluation.threshold import sweep_thresholds, best_threshold
from daily_system.evaluation.walkforward import WalkForwardCV
from daily_system.features.daily import aggregate_daily, add_calendar_features
from daily_system.features.sequences import build_sequences, split_sequences
from daily_system.io.dataset import DataLoader
from daily_system.labels.direction import get_label_distribution
from daily_system.models import build_classifier
from daily_system.strategies.rules import (
    baseline_decisions, threshold_decisions, always_long_decisions
)

logger = logging.getLogger(__name__)


def _date_range(df: pd.DataFrame) -> Dict[str, str]:
    return {'start': str(df['date'].iloc[0]), 'end': str(df['date'].iloc[-1])}


def _holdout(X: np.ndarray, y: np.ndarray, fraction: float):
    """Split the tail of the training sequences off for early stopping."""
    n_val = int(len(X) * fraction)
    if n_val < 2 or len(X) - n_val < 2:
        return X, y, None, None
    if len(np.unique(y[:-n_val])) < 2:
        return X, y, None, None
    return X[:-n_val], y[:-n_val], X[-n_val:], y[-n_val:]


def run_cv(settings: Dict, X: np.ndarray, y: np.ndarray) -> list:
    """Walk-forward accuracy of fresh classifiers on the training sequences."""
    cv_cfg = settings['cv']
    cv = WalkForwardCV(
        n_folds=cv_cfg['n_folds'],
        embargo_days=cv_cfg.get('embargo_days', 0),
        purge_days=cv_cfg.get('purge_days', 0),
        min_train=cv_cfg.get('min_train', 40),
        min_val=cv_cfg.get('min_val', 10)
    )

    fold_results = []
    for fold_idx, (train_idx, val_idx) in enumerate(cv.split(len(X))):
        if len(np.unique(y[train_idx])) < 2:
            logger.warning("Fold %d skipped: single-class training labels", fold_idx + 1)
            continue

        fold_model = build_classifier(settings)
        fold_model.fit(X[train_idx], y[train_idx])
        accuracy = float((fold_model.predict(X[val_idx]) == y[val_idx]).mean())

        fold_results.append({
            'fold': fold_idx + 1,
            'n_train': len(train_idx),
            'n_val': len(val_idx),
            'accuracy': accuracy
        })
        logger.info("Fold %d: Accuracy=%.3f", fold_idx + 1, accuracy)

    return fold_results


def run_pipeline(settings: Dict, ticks: Optional[pd.DataFrame] = None) -> Dict:
    """
    Run the full study.

    Args:
        settings: Settings dictionary (io.settings.load_settings)
        ticks: Optional tick frame; loaded from settings['data']['path'] if None

    Returns:
        Result dictionary consumed by evaluation.reporting.format_report
    """
    loader = DataLoader(settings)
    backtest_cfg = settings['backtest']
    principal = float(backtest_cfg['principal'])
    threshold = float(backtest_cfg['threshold'])
    lookback = int(settings['features']['lookback'])
    feature_cols = list(settings['features']['columns'])

    # Daily records
    if ticks is None:
        ticks = loader.load_ticks()
    daily = aggregate_daily(ticks, price_col=settings['data'].get('price_col', 'close'))
    train_df, eval_df = loader.split(daily)
    split_idx = len(train_df)
    logger.info("Daily records: %d (train %d, eval %d)", len(daily), len(train_df), len(eval_df))

    # Rule-based references
    seed_return = float(train_df['return'].iloc[-1]) if backtest_cfg.get('seed_baseline_from_train', True) else None
    baseline = baseline_decisions(eval_df['return'], seed_return=seed_return)
    buy_and_hold = always_long_decisions(len(eval_df))

    # Sequences
    if split_idx <= lookback:
        raise InvalidInputError(
            f"Training window ({split_idx} days) must be longer than lookback ({lookback})"
        )
    X, y, positions = build_sequences(add_calendar_features(daily), lookback, feature_cols)
    (X_train, y_train), (X_eval, y_eval) = split_sequences(X, y, positions, split_idx)

    cv_results = run_cv(settings, X_train, y_train) if settings['cv'].get('n_folds', 0) > 0 else []

    # Final classifier
    X_fit, y_fit, X_val, y_val = _holdout(
        X_train, y_train, float(settings['model'].get('validation_fraction', 0.0))
    )
    model = build_classifier(settings)
    model.fit(X_fit, y_fit, X_val, y_val)

    proba = model.predict_proba(X_eval)
    y_pred = np.argmax(proba, axis=1)
    decisions = threshold_decisions(proba, threshold)

    sweep = sweep_thresholds(proba, eval_df, backtest_cfg.get('thresholds', [threshold]), principal)

    return {
        'n_ticks': int(len(ticks)),
        'n_days': int(len(daily)),
        'train_range': _date_range(train_df),
        'eval_range': _date_range(eval_df),
        'train_days': int(len(train_df)),
        'eval_days': int(len(eval_df)),
        'principal': principal,
        'distribution': return_distribution(daily),
        'monthly': monthly_seasonality(daily),
        'weekday': weekday_seasonality(daily),
        'label_distribution': get_label_distribution(y_train),
        'seed_return': seed_return,
        'baseline': calculate_metrics(baseline, eval_df, principal),
        'buy_and_hold': calculate_metrics(buy_and_hold, eval_df, principal),
        'model_type': settings['model']['type'],
        'cv_results': cv_results,
        'classifier': classification_metrics(y_eval, y_pred),
        'threshold': threshold,
        'model_backtest': calculate_metrics(decisions, eval_df, principal),
        'threshold_sweep': sweep,
        'best_threshold': best_threshold(sweep)
    }
