"""Decision policies: lag-1 baseline, classifier threshold, buy-and-hold."""

from .rules import baseline_decisions, threshold_decisions, always_long_decisions

__all__ = ["baseline_decisions", "threshold_decisions", "always_long_decisions"]
