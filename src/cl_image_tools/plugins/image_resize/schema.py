"""Image resize parameters and output schemas."""

from typing import Literal

from pydantic import Field, model_validator

from ...common.schema_job import BaseJobParams, TaskOutput

ResizeMode = Literal["within", "exact"]
PlanKind = Literal["no_change", "scaled", "scaled_with_crop"]


class ImageResizeParams(BaseJobParams):
    """Parameters for the image resize task.

    Attributes:
        input_path: Job-relative path of the source image
        output_path: Job-relative path of the resized image
        mode: ``within`` shrinks the image to fit a bounding box (never
            enlarges, never crops); ``exact`` produces exactly the requested
            size, cropping the overhang from the centre
        width: Bounding / target width in pixels
        height: Bounding / target height in pixels. In ``exact`` mode one of
            width or height may be omitted and is derived from the aspect ratio
        quality: JPEG quality (1-100); defaults to the configured quality
    """

    mode: ResizeMode = Field(default="within", description="Resize intent")
    width: int | None = Field(default=None, gt=0, description="Width in pixels")
    height: int | None = Field(default=None, gt=0, description="Height in pixels")
    quality: int | None = Field(default=None, ge=1, le=100, description="JPEG quality")

    @model_validator(mode="after")
    def validate_dimensions(self) -> "ImageResizeParams":
        if self.mode == "within" and (self.width is None or self.height is None):
            raise ValueError("mode 'within' requires both width and height")
        if self.mode == "exact" and self.width is None and self.height is None:
            raise ValueError("mode 'exact' requires width or height")
        return self


class ImageResizeOutput(TaskOutput):
    output_path: str = Field(..., description="Job-relative path of the written image")
    original_width: int = Field(..., ge=1)
    original_height: int = Field(..., ge=1)
    width: int = Field(..., ge=1, description="Width of the written image")
    height: int = Field(..., ge=1, description="Height of the written image")
    plan: PlanKind = Field(..., description="Which kind of resize was applied")
    crop_axis: Literal["horizontal", "vertical"] | None = Field(
        default=None, description="Axis the overhang was cropped from"
    )
