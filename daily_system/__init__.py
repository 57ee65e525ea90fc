"""
DAILY DIRECTION SYSTEM
======================

Daily open/close research toolkit for a single currency pair.

Pipeline: minute ticks -> daily records -> seasonality / return stats
-> lag-1 baseline and recurrent classifier -> compounding backtest
"""

__version__ = "1.0.0"
__author__ = "Quant Dev Team"

from pathlib import Path

PACKAGE_ROOT = Path(__file__).parent
CONFIG_DIR = PACKAGE_ROOT / "config"
