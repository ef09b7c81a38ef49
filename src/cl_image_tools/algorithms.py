"""Framework-free algorithms, importable without FastAPI or a job runtime.

Example:
    from cl_image_tools.algorithms import Size, plan_fit_exact, image_resize

    plan = plan_fit_exact(Size(1920, 1080), 400, 400)

    image_resize(
        input_path="photo.jpg",
        output_path="square.jpg",
        mode="exact",
        width=400,
        height=400,
    )
"""

from .editor.dimensions import (
    CropAxis,
    NoChange,
    ResizePlan,
    Scaled,
    ScaledWithCrop,
    Size,
    centered_crop_origin,
    plan_fit_exact,
    plan_fit_within,
)
from .editor.image_editor import ImageEditor
from .plugins.image_edit.algo.image_edit import image_edit
from .plugins.image_resize.algo.image_resize import image_resize

__all__ = [
    # Planning
    "Size",
    "CropAxis",
    "NoChange",
    "Scaled",
    "ScaledWithCrop",
    "ResizePlan",
    "plan_fit_within",
    "plan_fit_exact",
    "centered_crop_origin",
    # Editing
    "ImageEditor",
    "image_resize",
    "image_edit",
]
