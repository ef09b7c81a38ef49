"""Sequential image edit pipeline (single file)."""

from collections.abc import Sequence
from pathlib import Path
from typing import Callable, TypedDict

from loguru import logger

from ....editor.image_editor import ImageEditor
from ..schema import (
    BrightnessOperation,
    ColorizeOperation,
    CropCenterOperation,
    CropOperation,
    EditOperation,
    GrayscaleOperation,
    ResizeExactOperation,
    ResizeWithinOperation,
    RotateOperation,
)


class EditResult(TypedDict):
    output_path: str
    width: int
    height: int
    operations_applied: int


def apply_operation(editor: ImageEditor, operation: EditOperation) -> None:
    match operation:
        case CropOperation(x=x, y=y, width=width, height=height):
            _ = editor.crop(x, y, width, height)
        case CropCenterOperation(width=width, height=height):
            _ = editor.crop_from_center(width, height)
        case RotateOperation(direction="clockwise"):
            _ = editor.rotate_clockwise()
        case RotateOperation(direction="counter_clockwise"):
            _ = editor.rotate_counter_clockwise()
        case RotateOperation():
            _ = editor.rotate_180()
        case GrayscaleOperation():
            _ = editor.grayscale()
        case BrightnessOperation(value=value):
            _ = editor.brightness(value)
        case ColorizeOperation(red=red, green=green, blue=blue, alpha=alpha):
            _ = editor.colorize(red, green, blue, alpha)
        case ResizeWithinOperation(max_width=max_width, max_height=max_height):
            _ = editor.resize_to_within(max_width, max_height)
        case ResizeExactOperation(width=width, height=height):
            _ = editor.resize_to(width, height)


def image_edit(
    *,
    input_path: str | Path,
    output_path: str | Path,
    operations: Sequence[EditOperation],
    quality: int | None = None,
    progress_callback: Callable[[int], None] | None = None,
) -> EditResult:
    """
    Apply edit operations in order to one image and write output.

    Nothing is written if any operation fails.

    Args:
        input_path: Path to input image
        output_path: Path to output image (same format as the input)
        operations: Operations to apply, first to last
        quality: JPEG quality override
        progress_callback: Called with a percentage after each operation

    Returns:
        Final dimensions and number of operations applied

    Raises:
        FileNotFoundError: If the input image or output directory does not exist
        InvalidArgumentError: If an operation does not fit the current image
            (e.g. crop out of bounds)
    """
    total = len(operations)

    with ImageEditor(input_path) as editor:
        for index, operation in enumerate(operations):
            logger.debug(f"Applying {operation.op} ({index + 1}/{total})")
            apply_operation(editor, operation)
            if progress_callback:
                # 100 is reported once the file is written
                progress_callback(min(99, int((index + 1) / total * 100)))

        _ = editor.save_as(output_path, quality)

        return {
            "output_path": str(output_path),
            "width": editor.width,
            "height": editor.height,
            "operations_applied": total,
        }
