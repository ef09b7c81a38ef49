"""Image resize task implementation."""

import logging
from io import BytesIO
from typing import Callable, override

from ...common.compute_module import ComputeModule
from ...common.job_storage import JobStorage
from ...utils.media_types import MediaType, sniff_mime, with_image_extension
from .algo.image_resize import image_resize
from .schema import ImageResizeOutput, ImageResizeParams

logger = logging.getLogger(__name__)


class ImageResizeTask(ComputeModule[ImageResizeParams, ImageResizeOutput]):
    """Compute module for fitting or filling an image to given dimensions."""

    schema: type[ImageResizeParams] = ImageResizeParams

    @property
    @override
    def task_type(self) -> str:
        return "image_resize"

    @override
    async def run(
        self,
        job_id: str,
        params: ImageResizeParams,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> ImageResizeOutput:
        input_path = storage.resolve_path(job_id, params.input_path)
        if not input_path.exists():
            raise FileNotFoundError("Input file not found: " + str(input_path))

        with input_path.open("rb") as f:
            mime_type = sniff_mime(BytesIO(f.read()))

        if MediaType.from_mime(mime_type) != MediaType.IMAGE:
            raise RuntimeError(
                "Unsupported media type: " + mime_type + ". Only images can be resized."
            )

        # the output keeps the input format, whatever the upload was named
        output_relative = with_image_extension(params.output_path, mime_type)
        output_path = storage.allocate_path(
            job_id=job_id,
            relative_path=output_relative,
        )

        result = image_resize(
            input_path=input_path,
            output_path=output_path,
            mode=params.mode,
            width=params.width,
            height=params.height,
            quality=params.quality,
        )
        logger.info(
            "Job %s: %dx%d -> %dx%d (%s)",
            job_id,
            result["original_width"],
            result["original_height"],
            result["width"],
            result["height"],
            result["plan"],
        )

        if progress_callback:
            progress_callback(100)

        return ImageResizeOutput(
            output_path=output_relative,
            original_width=result["original_width"],
            original_height=result["original_height"],
            width=result["width"],
            height=result["height"],
            plan=result["plan"],
            crop_axis=result["crop_axis"],
        )
