"""Text report of a pipeline run."""

from typing import Dict

import numpy as np


def _backtest_lines(name: str, metrics: Dict) -> str:
    return (
        f"{name:<18} trades={metrics.get('total_trades', 0):>4}  "
        f"profit=${metrics.get('profit', 0):>9.2f}  "
        f"return={metrics.get('total_return_pct', 0):>6.2f}%  "
        f"win={metrics.get('win_rate', 0):>5.1f}%  "
        f"maxDD={metrics.get('max_drawdown_pct', 0):>5.2f}%\n"
    )


def format_report(result: Dict) -> str:
    """
    Render a pipeline result as plain text.

    Args:
        result: Dictionary returned by pipeline.run_pipeline

    Returns:
        Report string
    """
    dist = result['distribution']
    clf = result['classifier']
    principal = result['principal']

    report = f"""
{'='*80}
DAILY DIRECTION STUDY
{'='*80}

Ticks:             {result['n_ticks']:,}
Daily records:     {result['n_days']}
Train window:      {result['train_range']['start']} -> {result['train_range']['end']} ({result['train_days']} days)
Eval window:       {result['eval_range']['start']} -> {result['eval_range']['end']} ({result['eval_days']} days)

{'='*80}
DAILY RETURNS
{'='*80}

Mean:              {dist['mean']*100:.4f}%
Std:               {dist['std']*100:.4f}%
Skew / Kurtosis:   {dist['skew']:.3f} / {dist['kurtosis']:.3f}
Min / Max:         {dist['min']*100:.3f}% / {dist['max']*100:.3f}%
Positive days:     {dist['pct_positive']:.1f}%

Mean return by month (%):
"""

    for month, row in result['monthly'].iterrows():
        report += f"  {int(month):>2}: {row['mean_return']*100:>8.4f}  (n={int(row['count'])}, up={row['pct_positive']:.0f}%)\n"

    report += "\nMean return by weekday (%):\n"
    for weekday, row in result['weekday'].iterrows():
        report += f"  {weekday}: {row['mean_return']*100:>8.4f}  (n={int(row['count'])})\n"

    report += f"""
{'='*80}
CLASSIFIER ({result['model_type']})
{'='*80}

Train labels:      Up={result['label_distribution']['up_pct']:.1f}%, Down={result['label_distribution']['down_pct']:.1f}%
"""

    if result['cv_results']:
        accs = [r['accuracy'] for r in result['cv_results']]
        report += f"Walk-forward CV:   {len(accs)} folds, accuracy {np.mean(accs):.3f} ± {np.std(accs):.3f}\n"

    report += (
        f"Eval accuracy:     {clf['accuracy']:.3f}\n"
        f"Precision (up):    {clf['precision_up']:.3f}\n"
        f"Recall (up):       {clf['recall_up']:.3f}\n"
        f"Confusion:         TN={clf['true_negative']} FP={clf['false_positive']} "
        f"FN={clf['false_negative']} TP={clf['true_positive']}\n"
    )

    report += f"""
{'='*80}
BACKTEST (principal ${principal:,.2f})
{'='*80}

"""
    report += _backtest_lines("Buy & hold", result['buy_and_hold'])
    report += _backtest_lines("Lag-1 baseline", result['baseline'])
    report += _backtest_lines(f"Model (t={result['threshold']:+.2f})", result['model_backtest'])

    report += "\nThreshold sweep:\n"
    for _, row in result['threshold_sweep'].iterrows():
        report += (
            f"  t={row['threshold']:+.2f}  trades={int(row['trades']):>4}  "
            f"profit=${row['profit']:>9.2f}  precision={row['precision_up']:.3f}\n"
        )
    report += f"Best threshold:    {result['best_threshold']:+.2f}\n"

    report += f"\n{'='*80}\n"
    return report
