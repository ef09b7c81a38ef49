"""Image resize logic on top of the planner and editor (single file)."""

from pathlib import Path
from typing import Literal, TypedDict

from ....common.errors import InvalidArgumentError
from ....editor.dimensions import (
    NoChange,
    ResizePlan,
    ScaledWithCrop,
    plan_fit_exact,
    plan_fit_within,
)
from ....editor.image_editor import ImageEditor

PlanKind = Literal["no_change", "scaled", "scaled_with_crop"]
AxisName = Literal["horizontal", "vertical"]


class ResizeResult(TypedDict):
    output_path: str
    original_width: int
    original_height: int
    width: int
    height: int
    plan: PlanKind
    crop_axis: AxisName | None


def describe_plan(plan: ResizePlan) -> tuple[PlanKind, AxisName | None]:
    if isinstance(plan, NoChange):
        return "no_change", None
    if isinstance(plan, ScaledWithCrop):
        return "scaled_with_crop", plan.crop_axis.value
    return "scaled", None


def image_resize(
    *,
    input_path: str | Path,
    output_path: str | Path,
    mode: Literal["within", "exact"],
    width: int | None = None,
    height: int | None = None,
    quality: int | None = None,
) -> ResizeResult:
    """
    Resize a single image and write output.

    Framework-agnostic, single-image operation. The image is written even
    when no resize is needed, so the output always exists.

    Args:
        input_path: Path to input image
        output_path: Path to output image (same format as the input)
        mode: "within" to fit a bounding box, "exact" to fill and crop
        width: Bounding / target width
        height: Bounding / target height
        quality: JPEG quality override

    Returns:
        Dimensions before and after, and the kind of plan applied

    Raises:
        FileNotFoundError: If the input image or output directory does not exist
        InvalidArgumentError: If the dimensions are not usable for ``mode``
        UnsupportedImageTypeError: If the input is not a JPEG, PNG or GIF
    """
    with ImageEditor(input_path) as editor:
        original = editor.size

        if mode == "within":
            if width is None or height is None:
                raise InvalidArgumentError("mode 'within' requires both width and height")
            plan = plan_fit_within(original, width, height)
        else:
            plan = plan_fit_exact(original, width, height)

        _ = editor.apply_plan(plan).save_as(output_path, quality)
        kind, axis = describe_plan(plan)

        return {
            "output_path": str(output_path),
            "original_width": original.width,
            "original_height": original.height,
            "width": editor.width,
            "height": editor.height,
            "plan": kind,
            "crop_axis": axis,
        }
