"""Image resize algorithm."""

from .image_resize import image_resize

__all__ = ["image_resize"]
