"""Direction classifiers."""

from typing import Dict

from daily_system.core.errors import InvalidInputError
from .base import BaseModel
from .ensembles import EnsembleClassifier


def build_classifier(settings: Dict) -> BaseModel:
    """Build the classifier named by settings['model']['type']."""
    model_cfg = settings['model']
    model_type = model_cfg['type']

    if model_type == 'lstm':
        from .recurrent import RecurrentClassifier
        return RecurrentClassifier(
            hidden_size=model_cfg.get('hidden_size', 32),
            num_layers=model_cfg.get('num_layers', 1),
            dropout=model_cfg.get('dropout', 0.0),
            epochs=model_cfg.get('epochs', 60),
            batch_size=model_cfg.get('batch_size', 16),
            learning_rate=model_cfg.get('learning_rate', 1e-3),
            patience=model_cfg.get('patience', 10),
            device=model_cfg.get('device', 'cpu'),
            seed=model_cfg.get('seed', 42)
        )
    if model_type == 'ensemble':
        return EnsembleClassifier(
            weights=settings.get('ensemble', {}).get('weights'),
            random_state=model_cfg.get('seed', 42)
        )

    raise InvalidInputError(f"Unknown model type: {model_type}")


__all__ = ["BaseModel", "EnsembleClassifier", "build_classifier"]
