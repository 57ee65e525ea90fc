"""Evaluation framework: backtest, metrics, threshold sweep, walk-forward CV."""

from .backtest import evaluate_backtest, equity_curve, DEFAULT_PRINCIPAL
from .metrics import calculate_metrics, calculate_sharpe_per_trade, classification_metrics
from .threshold import sweep_thresholds, best_threshold
from .walkforward import WalkForwardCV
from .reporting import format_report

__all__ = [
    "evaluate_backtest", "equity_curve", "DEFAULT_PRINCIPAL",
    "calculate_metrics", "calculate_sharpe_per_trade", "classification_metrics",
    "sweep_thresholds", "best_threshold", "WalkForwardCV", "format_report"
]
