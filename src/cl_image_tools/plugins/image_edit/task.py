"""Image edit task implementation."""

import logging
from io import BytesIO
from typing import Callable, override

from ...common.compute_module import ComputeModule
from ...common.job_storage import JobStorage
from ...utils.media_types import MediaType, sniff_mime, with_image_extension
from .algo.image_edit import image_edit
from .schema import ImageEditOutput, ImageEditParams

logger = logging.getLogger(__name__)


class ImageEditTask(ComputeModule[ImageEditParams, ImageEditOutput]):
    """Compute module applying a crop / rotate / filter / resize pipeline to an image."""

    schema: type[ImageEditParams] = ImageEditParams

    @property
    @override
    def task_type(self) -> str:
        return "image_edit"

    @override
    async def run(
        self,
        job_id: str,
        params: ImageEditParams,
        storage: JobStorage,
        progress_callback: Callable[[int], None] | None = None,
    ) -> ImageEditOutput:
        input_path = storage.resolve_path(job_id, params.input_path)
        if not input_path.exists():
            raise FileNotFoundError("Input file not found: " + str(input_path))

        with input_path.open("rb") as f:
            mime_type = sniff_mime(BytesIO(f.read()))

        if MediaType.from_mime(mime_type) != MediaType.IMAGE:
            raise RuntimeError(
                "Unsupported media type: " + mime_type + ". Only images can be edited."
            )

        # the output keeps the input format, whatever the upload was named
        output_relative = with_image_extension(params.output_path, mime_type)
        output_path = storage.allocate_path(
            job_id=job_id,
            relative_path=output_relative,
        )

        result = image_edit(
            input_path=input_path,
            output_path=output_path,
            operations=params.operations,
            quality=params.quality,
            progress_callback=progress_callback,
        )
        logger.info(
            "Job %s: applied %d operations, result %dx%d",
            job_id,
            result["operations_applied"],
            result["width"],
            result["height"],
        )

        if progress_callback:
            progress_callback(100)

        return ImageEditOutput(
            output_path=output_relative,
            width=result["width"],
            height=result["height"],
            operations_applied=result["operations_applied"],
        )
