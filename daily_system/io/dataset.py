"""Tick loading and train/evaluation splitting."""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import pandas as pd

from daily_system.core.errors import InvalidInputError
from daily_system.core.types import Tick

logger = logging.getLogger(__name__)

TICK_COLUMNS = ['timestamp', 'open', 'high', 'low', 'close', 'volume']
TIMESTAMP_FORMAT = "%Y%m%d %H%M%S"


def load_ticks(
    path: str,
    delimiter: str = ";",
    has_header: bool = False,
    timestamp_format: str = TIMESTAMP_FORMAT
) -> pd.DataFrame:
    """
    Load minute ticks from a delimited text (or parquet) file.

    Expected columns, in order: timestamp, open, high, low, close, volume.
    Timestamps look like '20170102 000000'.

    Args:
        path: Path to file
        delimiter: Field separator
        has_header: Whether the first row holds column names
        timestamp_format: strptime format of the timestamp column

    Returns:
        DataFrame with TICK_COLUMNS sorted by timestamp
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Data not found: {path}")

    if path.suffix == '.parquet':
        df = pd.read_parquet(path)
        df.columns = df.columns.str.lower()
    elif has_header:
        df = pd.read_csv(path, sep=delimiter)
        df.columns = df.columns.str.strip().str.lower()
    else:
        df = pd.read_csv(path, sep=delimiter, header=None, names=TICK_COLUMNS)

    missing = [col for col in ['timestamp', 'open', 'close'] if col not in df.columns]
    if missing:
        raise InvalidInputError(f"Missing required columns in {path}: {missing}")

    # Add optional columns if missing
    for col in ['high', 'low', 'volume']:
        if col not in df.columns:
            df[col] = float('nan') if col != 'volume' else 0

    if not pd.api.types.is_datetime64_any_dtype(df['timestamp']):
        try:
            df['timestamp'] = pd.to_datetime(
                df['timestamp'].astype(str).str.strip(), format=timestamp_format
            )
        except ValueError as e:
            raise InvalidInputError(f"Unparseable timestamp in {path}: {e}") from e

    df = df[TICK_COLUMNS].sort_values('timestamp', kind='stable').reset_index(drop=True)

    logger.info("Loaded %d ticks from %s", len(df), path)
    return df


def ticks_to_frame(ticks: Iterable[Tick]) -> pd.DataFrame:
    """Build a tick frame from Tick records."""
    df = pd.DataFrame([t.to_dict() for t in ticks], columns=TICK_COLUMNS)
    if len(df) > 0:
        df['timestamp'] = pd.to_datetime(df['timestamp'])
    return df


def split_train_eval(
    daily: pd.DataFrame,
    train_fraction: Optional[float] = None,
    eval_start: Optional[str] = None
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Chronological split into training and evaluation windows.

    eval_start wins over train_fraction when both are given.

    Returns:
        (train_df, eval_df), both re-indexed from 0
    """
    if len(daily) < 2:
        raise InvalidInputError(f"Need at least 2 daily records to split, got {len(daily)}")

    if eval_start is not None:
        start = pd.Timestamp(eval_start).date()
        split_idx = int((daily['date'] < start).sum())
    elif train_fraction is not None:
        if not 0 < train_fraction < 1:
            raise InvalidInputError(f"train_fraction must be in (0, 1), got {train_fraction}")
        split_idx = int(len(daily) * train_fraction)
    else:
        raise InvalidInputError("Either train_fraction or eval_start is required")

    if split_idx <= 0 or split_idx >= len(daily):
        raise InvalidInputError(
            f"Split leaves an empty window (split at {split_idx} of {len(daily)} days)"
        )

    train_df = daily.iloc[:split_idx].reset_index(drop=True)
    eval_df = daily.iloc[split_idx:].reset_index(drop=True)

    return train_df, eval_df


class DataLoader:
    """Settings-driven data loading."""

    def __init__(self, settings: Dict):
        """Initialize with a settings dictionary (see io.settings.load_settings)."""
        self.config = settings
        data = settings['data']
        self.path = data['path']
        self.delimiter = data.get('delimiter', ';')
        self.has_header = data.get('has_header', False)
        self.timestamp_format = data.get('timestamp_format', TIMESTAMP_FORMAT)
        self.train_fraction = data.get('train_fraction')
        self.eval_start = data.get('eval_start')

    def load_ticks(self) -> pd.DataFrame:
        return load_ticks(
            self.path,
            delimiter=self.delimiter,
            has_header=self.has_header,
            timestamp_format=self.timestamp_format
        )

    def split(self, daily: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """Split daily records into (train, eval) per settings."""
        return split_train_eval(daily, self.train_fraction, self.eval_start)
