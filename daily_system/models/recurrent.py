"""LSTM direction classifier (PyTorch)."""

import copy
import logging
from typing import Optional

import numpy as np
import torch
import torch.nn as nn
from torch.utils.data import DataLoader, TensorDataset

from .base import BaseModel, balanced_class_weights

logger = logging.getLogger(__name__)


def _set_seed(seed: int):
    """Set seeds for reproducibility."""
    np.random.seed(seed)
    torch.manual_seed(seed)


class LSTMNet(nn.Module):
    """LSTM over the look-back window, linear head on the last hidden state."""

    def __init__(self, n_features: int, hidden_size: int = 32, num_layers: int = 1,
                 dropout: float = 0.0, n_classes: int = 2):
        super().__init__()
        self.lstm = nn.LSTM(
            input_size=n_features,
            hidden_size=hidden_size,
            num_layers=num_layers,
            batch_first=True,
            dropout=dropout if num_layers > 1 else 0.0,
        )
        self.dropout = nn.Dropout(dropout)
        self.head = nn.Linear(hidden_size, n_classes)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        out, _ = self.lstm(x)
        return self.head(self.dropout(out[:, -1, :]))


class RecurrentClassifier(BaseModel):
    """
    Small recurrent classifier predicting whether a day closes up.

    Trained with class-balanced cross entropy and Adam. When a validation
    set is passed to fit, the weights with the lowest validation loss are
    kept and training stops after `patience` epochs without improvement.
    """

    def __init__(
        self,
        hidden_size: int = 32,
        num_layers: int = 1,
        dropout: float = 0.0,
        epochs: int = 60,
        batch_size: int = 16,
        learning_rate: float = 1e-3,
        patience: int = 10,
        device: str = "cpu",
        seed: int = 42
    ):
        super().__init__()
        self.hidden_size = hidden_size
        self.num_layers = num_layers
        self.dropout = dropout
        self.epochs = epochs
        self.batch_size = batch_size
        self.learning_rate = learning_rate
        self.patience = patience
        self.device = torch.device(device)
        self.seed = seed
        self.net = None
        self.history = []

    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        X_val: Optional[np.ndarray] = None,
        y_val: Optional[np.ndarray] = None
    ):
        """Train the network."""
        self._check_training_data(X, y)
        _set_seed(self.seed)

        X_scaled = self._scale(X, fit=True)
        y = np.asarray(y).astype(np.int64)

        self.net = LSTMNet(
            n_features=X.shape[2],
            hidden_size=self.hidden_size,
            num_layers=self.num_layers,
            dropout=self.dropout,
            n_classes=self.n_classes
        ).to(self.device)

        weights = torch.tensor(balanced_class_weights(y), dtype=torch.float32, device=self.device)
        criterion = nn.CrossEntropyLoss(weight=weights)
        optimizer = torch.optim.Adam(self.net.parameters(), lr=self.learning_rate)

        generator = torch.Generator().manual_seed(self.seed)
        loader = DataLoader(
            TensorDataset(torch.from_numpy(X_scaled), torch.from_numpy(y)),
            batch_size=self.batch_size,
            shuffle=True,
            generator=generator
        )

        has_val = X_val is not None and y_val is not None and len(X_val) > 0
        if has_val:
            X_val_t = torch.from_numpy(self._scale(X_val)).to(self.device)
            y_val_t = torch.from_numpy(np.asarray(y_val).astype(np.int64)).to(self.device)

        best_loss = float('inf')
        best_state = None
        epochs_without_improvement = 0
        self.history = []

        for epoch in range(self.epochs):
            self.net.train()
            epoch_loss = 0.0
            for xb, yb in loader:
                xb, yb = xb.to(self.device), yb.to(self.device)
                optimizer.zero_grad()
                loss = criterion(self.net(xb), yb)
                loss.backward()
                optimizer.step()
                epoch_loss += loss.item() * len(xb)
            epoch_loss /= len(X_scaled)

            record = {'epoch': epoch + 1, 'loss': epoch_loss}

            if has_val:
                self.net.eval()
                with torch.no_grad():
                    val_loss = criterion(self.net(X_val_t), y_val_t).item()
                record['val_loss'] = val_loss

                if val_loss < best_loss:
                    best_loss = val_loss
                    best_state = copy.deepcopy(self.net.state_dict())
                    epochs_without_improvement = 0
                else:
                    epochs_without_improvement += 1

            self.history.append(record)
            logger.debug("Epoch %d: %s", epoch + 1, record)

            if has_val and epochs_without_improvement >= self.patience:
                logger.info("Early stopping at epoch %d (best val loss %.4f)", epoch + 1, best_loss)
                break

        if best_state is not None:
            self.net.load_state_dict(best_state)

        self.is_fitted = True
        return self

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Predict (prob_down, prob_up)."""
        self._check_fitted()
        self.net.eval()
        with torch.no_grad():
            logits = self.net(torch.from_numpy(self._scale(X)).to(self.device))
            proba = torch.softmax(logits, dim=1)
        return proba.cpu().numpy().astype(float)
