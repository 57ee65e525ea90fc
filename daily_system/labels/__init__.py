"""Label generation for classification tasks."""

from .direction import direction_labels, get_label_distribution, UP, DOWN

__all__ = ["direction_labels", "get_label_distribution", "UP", "DOWN"]
