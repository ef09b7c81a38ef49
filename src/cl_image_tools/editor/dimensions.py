"""Pure dimension planning for resize operations (single file).

Given a source size and a resize intent, compute the size to scale to and
whether a centred crop has to follow. No image backend is involved; the
resulting plan is applied by :class:`~cl_image_tools.editor.image_editor.ImageEditor`.
"""

import math
from dataclasses import dataclass
from enum import StrEnum

from ..common.errors import InvalidArgumentError


def _check_dimension(name: str, value: object) -> int:
    # bool is an int subclass but never a valid dimension
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Size:
    """Immutable pixel size; both sides are always >= 1."""

    width: int
    height: int

    def __post_init__(self) -> None:
        _ = _check_dimension("width", self.width)
        _ = _check_dimension("height", self.height)

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


class CropAxis(StrEnum):
    HORIZONTAL = "horizontal"  # excess width trimmed left and right
    VERTICAL = "vertical"  # excess height trimmed top and bottom


@dataclass(frozen=True)
class NoChange:
    """The source already satisfies the requested constraint."""


@dataclass(frozen=True)
class Scaled:
    target: Size


@dataclass(frozen=True)
class ScaledWithCrop:
    """Scale to ``canvas_before_crop`` first, then crop a centred ``target`` window."""

    target: Size
    canvas_before_crop: Size
    crop_axis: CropAxis

    @property
    def crop_origin(self) -> tuple[int, int]:
        return centered_crop_origin(self.canvas_before_crop, self.target)


ResizePlan = NoChange | Scaled | ScaledWithCrop


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3).

    The builtin ``round`` rounds ties to even, which would turn 2.5 into 2.
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def _scaled(length: int, ratio: float) -> int:
    return max(1, round_half_away_from_zero(length * ratio))


def plan_fit_within(source: Size, max_width: int, max_height: int) -> ResizePlan:
    """Plan a downscale so that ``source`` fits inside ``max_width`` x ``max_height``.

    Aspect ratio is preserved and images are never enlarged. The driving axis
    lands exactly on its bound; the other axis may overshoot its bound by one
    pixel because of rounding, which is accepted as is.

    Raises:
        InvalidArgumentError: If either bound is not a positive integer
    """
    _ = _check_dimension("max_width", max_width)
    _ = _check_dimension("max_height", max_height)

    if source.width <= max_width and source.height <= max_height:
        return NoChange()

    ratio = max_width / source.width
    if source.height * ratio > max_height:
        # width-driven height would overflow, let height drive
        ratio = max_height / source.height

    return Scaled(Size(_scaled(source.width, ratio), _scaled(source.height, ratio)))


def plan_fit_exact(
    source: Size,
    target_width: int | None,
    target_height: int | None,
) -> ResizePlan:
    """Plan a resize to exact dimensions, cropping any overhang from the centre.

    Passing ``None`` for one dimension leaves that axis free: it is derived
    from the other one so the aspect ratio is kept and no crop is needed.

    Raises:
        InvalidArgumentError: If both targets are ``None`` or any supplied
            target is not a positive integer
    """
    if target_width is None and target_height is None:
        raise InvalidArgumentError("At least one of target_width or target_height is required")

    if target_height is None:
        width = _check_dimension("target_width", target_width)
        if source.width == width:
            return NoChange()
        return Scaled(Size(width, _scaled(source.height, width / source.width)))

    if target_width is None:
        height = _check_dimension("target_height", target_height)
        if source.height == height:
            return NoChange()
        return Scaled(Size(_scaled(source.width, height / source.height), height))

    target = Size(
        _check_dimension("target_width", target_width),
        _check_dimension("target_height", target_height),
    )
    if source == target:
        return NoChange()

    ratio = target.width / source.width
    scaled_height = source.height * ratio

    if scaled_height < target.height:
        # too short: match the height and trim the horizontal overhang
        ratio = target.height / source.height
        canvas = Size(_scaled(source.width, ratio), target.height)
        return ScaledWithCrop(target, canvas, CropAxis.HORIZONTAL)

    if scaled_height > target.height:
        canvas = Size(target.width, _scaled(source.height, ratio))
        return ScaledWithCrop(target, canvas, CropAxis.VERTICAL)

    return Scaled(target)


def centered_crop_origin(canvas: Size, target: Size) -> tuple[int, int]:
    """Top-left corner of a ``target`` sized window centred on ``canvas``.

    Uses floor division, so an odd overhang leaves the extra pixel on the
    right or bottom edge.
    """
    if target.width > canvas.width or target.height > canvas.height:
        raise InvalidArgumentError(
            f"Crop window {target.width}x{target.height} "
            + f"exceeds canvas {canvas.width}x{canvas.height}"
        )
    return ((canvas.width - target.width) // 2, (canvas.height - target.height) // 2)
