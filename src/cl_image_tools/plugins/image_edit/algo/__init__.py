"""Image edit pipeline."""

from .image_edit import apply_operation, image_edit

__all__ = ["apply_operation", "image_edit"]
