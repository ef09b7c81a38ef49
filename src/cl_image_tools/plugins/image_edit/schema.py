"""Image edit pipeline parameters and output schemas."""

from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from ...common.schema_job import BaseJobParams, TaskOutput


class _Operation(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)


class CropOperation(_Operation):
    op: Literal["crop"] = "crop"
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class CropCenterOperation(_Operation):
    op: Literal["crop_center"] = "crop_center"
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class RotateOperation(_Operation):
    op: Literal["rotate"] = "rotate"
    direction: Literal["clockwise", "counter_clockwise", "180"]


class GrayscaleOperation(_Operation):
    op: Literal["grayscale"] = "grayscale"


class BrightnessOperation(_Operation):
    op: Literal["brightness"] = "brightness"
    value: int = Field(..., ge=-255, le=255)


class ColorizeOperation(_Operation):
    op: Literal["colorize"] = "colorize"
    red: int = Field(default=0, ge=-255, le=255)
    green: int = Field(default=0, ge=-255, le=255)
    blue: int = Field(default=0, ge=-255, le=255)
    alpha: int = Field(default=0, ge=0, le=127, description="0 opaque .. 127 transparent")


class ResizeWithinOperation(_Operation):
    op: Literal["resize_within"] = "resize_within"
    max_width: int = Field(..., gt=0)
    max_height: int = Field(..., gt=0)


class ResizeExactOperation(_Operation):
    op: Literal["resize_exact"] = "resize_exact"
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def validate_dimensions(self) -> "ResizeExactOperation":
        if self.width is None and self.height is None:
            raise ValueError("resize_exact requires width or height")
        return self


EditOperation = Annotated[
    CropOperation
    | CropCenterOperation
    | RotateOperation
    | GrayscaleOperation
    | BrightnessOperation
    | ColorizeOperation
    | ResizeWithinOperation
    | ResizeExactOperation,
    Field(discriminator="op"),
]

EditOperationList: TypeAdapter[list[EditOperation]] = TypeAdapter(list[EditOperation])


class ImageEditParams(BaseJobParams):
    """Parameters for the image edit task.

    Attributes:
        input_path: Job-relative path of the source image
        output_path: Job-relative path of the edited image
        operations: Operations applied in order to the same image
        quality: JPEG quality (1-100); defaults to the configured quality
    """

    operations: list[EditOperation] = Field(..., min_length=1)
    quality: int | None = Field(default=None, ge=1, le=100)


class ImageEditOutput(TaskOutput):
    output_path: str = Field(..., description="Job-relative path of the written image")
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    operations_applied: int = Field(..., ge=0)
