"""Resize planning and Pillow-backed image editing."""

from .dimensions import (
    CropAxis,
    NoChange,
    ResizePlan,
    Scaled,
    ScaledWithCrop,
    Size,
    centered_crop_origin,
    plan_fit_exact,
    plan_fit_within,
    round_half_away_from_zero,
)
from .formats import ImageFormat
from .image_editor import ImageEditor

__all__ = [
    "CropAxis",
    "ImageEditor",
    "ImageFormat",
    "NoChange",
    "ResizePlan",
    "Scaled",
    "ScaledWithCrop",
    "Size",
    "centered_crop_origin",
    "plan_fit_exact",
    "plan_fit_within",
    "round_half_away_from_zero",
]
