"""Image edit plugin."""

from .schema import ImageEditOutput, ImageEditParams
from .task import ImageEditTask

__all__ = ["ImageEditTask", "ImageEditParams", "ImageEditOutput"]
