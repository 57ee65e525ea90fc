"""Settings loading: packaged YAML defaults, user YAML, .env overrides."""

import copy
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from dotenv import load_dotenv

from daily_system import CONFIG_DIR
from daily_system.core.errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"
DATA_PATH_ENV = "DAILY_SYSTEM_DATA_PATH"
MODEL_TYPES = ("lstm", "ensemble")


def _deep_merge(base: Dict, override: Dict) -> Dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict] = None
) -> Dict:
    """
    Load settings.

    The packaged settings.yaml supplies defaults; a user file given by
    config_path is merged over it, then overrides (e.g. CLI flags).
    DAILY_SYSTEM_DATA_PATH (environment or .env) replaces data.path.

    Args:
        config_path: Optional user YAML file
        overrides: Optional nested dict merged last

    Returns:
        Settings dictionary
    """
    with open(DEFAULT_SETTINGS_PATH, 'r') as f:
        settings = yaml.safe_load(f)

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        with open(path, 'r') as f:
            user = yaml.safe_load(f) or {}
        settings = _deep_merge(settings, user)
        logger.debug("Merged settings from %s", path)

    load_dotenv()
    env_path = os.getenv(DATA_PATH_ENV)
    if env_path:
        settings['data']['path'] = env_path

    if overrides:
        settings = _deep_merge(settings, overrides)

    validate_settings(settings)
    return settings


def validate_settings(settings: Dict):
    """Raise InvalidInputError for values the pipeline cannot run with."""
    model_type = settings['model']['type']
    if model_type not in MODEL_TYPES:
        raise InvalidInputError(f"Unknown model type: {model_type}")

    train_fraction = settings['data'].get('train_fraction')
    if settings['data'].get('eval_start') is None:
        if train_fraction is None or not 0 < train_fraction < 1:
            raise InvalidInputError(
                f"data.train_fraction must be in (0, 1), got {train_fraction}"
            )

    if int(settings['features']['lookback']) < 1:
        raise InvalidInputError("features.lookback must be >= 1")

    if float(settings['backtest']['principal']) <= 0:
        raise InvalidInputError("backtest.principal must be > 0")
