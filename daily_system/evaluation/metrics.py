"""Performance metrics calculation."""

import numpy as np
from typing import Dict
from sklearn.metrics import accuracy_score, precision_score, recall_score, confusion_matrix

from .backtest import (
    evaluate_backtest, equity_curve, window_returns, as_decisions, as_principal, DEFAULT_PRINCIPAL
)


def calculate_metrics(decisions, window, principal: float = DEFAULT_PRINCIPAL) -> Dict:
    """
    Calculate backtest metrics for a decision vector.

    Args:
        decisions: Bool / 0-1 vector aligned with window
        window: Daily frame, DailyRecord list, or returns
        principal: Starting capital

    Returns:
        Dictionary of metrics
    """
    profit = evaluate_backtest(decisions, window, principal)
    principal = as_principal(principal)
    curve = equity_curve(decisions, window, principal)
    returns = window_returns(window)
    mask = as_decisions(decisions)

    traded = returns[mask]
    total_trades = len(traded)

    if total_trades == 0:
        return {
            'total_trades': 0,
            'days': int(len(returns)),
            'profit': 0.0,
            'total_return_pct': 0.0,
            'profit_factor': 0.0,
            'win_rate': 0.0,
            'sharpe_ratio': 0.0,
            'max_drawdown_pct': 0.0,
            'buy_and_hold_profit': float(evaluate_backtest(np.ones(len(returns), dtype=bool), returns, principal))
        }

    wins = traded > 0
    losses = traded < 0
    win_count = wins.sum()
    loss_count = losses.sum()

    # Profit Factor on daily returns of traded days
    gross_profit = traded[wins].sum() if win_count > 0 else 0
    gross_loss = abs(traded[losses].sum()) if loss_count > 0 else 0
    profit_factor = gross_profit / gross_loss if gross_loss > 0 else (gross_profit if gross_profit > 0 else 0)

    win_rate = win_count / total_trades * 100

    # Sharpe Ratio (per trade)
    sharpe_ratio = calculate_sharpe_per_trade(traded)

    # Drawdown from the running peak, starting at principal
    running_max = np.maximum.accumulate(np.concatenate([[principal], curve]))[1:]
    drawdown = (running_max - curve) / running_max
    max_drawdown_pct = drawdown.max() * 100

    avg_win = traded[wins].mean() if win_count > 0 else 0
    avg_loss = abs(traded[losses].mean()) if loss_count > 0 else 0
    expectancy = (win_rate/100 * avg_win) - ((100-win_rate)/100 * avg_loss)

    buy_and_hold = evaluate_backtest(np.ones(len(returns), dtype=bool), returns, principal)

    return {
        'total_trades': int(total_trades),
        'days': int(len(returns)),
        'win_count': int(win_count),
        'loss_count': int(loss_count),
        'profit': float(profit),
        'total_return_pct': float(profit / principal * 100),
        'profit_factor': float(profit_factor),
        'win_rate': float(win_rate),
        'sharpe_ratio': float(sharpe_ratio),
        'max_drawdown_pct': float(max_drawdown_pct),
        'expectancy': float(expectancy),
        'avg_win': float(avg_win),
        'avg_loss': float(avg_loss),
        'buy_and_hold_profit': float(buy_and_hold)
    }


def calculate_sharpe_per_trade(returns: np.ndarray) -> float:
    """Calculate Sharpe ratio per trade."""
    if len(returns) < 2 or returns.std() == 0:
        return 0.0
    return float(returns.mean() / returns.std())


def classification_metrics(y_true: np.ndarray, y_pred: np.ndarray) -> Dict:
    """Accuracy, precision/recall of the 'up' class and the confusion matrix."""
    y_true = np.asarray(y_true).astype(int)
    y_pred = np.asarray(y_pred).astype(int)

    cm = confusion_matrix(y_true, y_pred, labels=[0, 1])

    return {
        'accuracy': float(accuracy_score(y_true, y_pred)),
        'precision_up': float(precision_score(y_true, y_pred, pos_label=1, zero_division=0)),
        'recall_up': float(recall_score(y_true, y_pred, pos_label=1, zero_division=0)),
        'true_negative': int(cm[0, 0]),
        'false_positive': int(cm[0, 1]),
        'false_negative': int(cm[1, 0]),
        'true_positive': int(cm[1, 1])
    }
