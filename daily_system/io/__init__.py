"""I/O operations: tick loading, splitting, settings."""

from .dataset import load_ticks, ticks_to_frame, split_train_eval, DataLoader
from .settings import load_settings

__all__ = ["load_ticks", "ticks_to_frame", "split_train_eval", "DataLoader", "load_settings"]
