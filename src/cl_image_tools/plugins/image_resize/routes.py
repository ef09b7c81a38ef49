"""Image resize route factory."""

from pathlib import Path
from typing import Annotated, Callable, Literal

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from ...common.job_creator import create_job_from_upload
from ...common.job_repository import JobRepository
from ...common.job_storage import JobStorage
from ...common.schema_job_record import JobCreatedResponse
from ...common.user import UserLike
from .schema import ImageResizeOutput, ImageResizeParams


def output_path_for(input_path: str, prefix: str) -> str:
    """Job-relative output path named after the upload.

    The task replaces the suffix when it does not match the sniffed format.
    """
    source = Path(input_path)
    return f"output/{prefix}_{source.stem}{source.suffix or '.png'}"


def create_router(
    repository: JobRepository,
    file_storage: JobStorage,
    get_current_user: Callable[[], UserLike | None],
) -> APIRouter:
    """Create router with injected dependencies."""
    router = APIRouter()

    @router.post("/jobs/image_resize", response_model=JobCreatedResponse)
    async def create_resize_job(
        file: Annotated[UploadFile, File(description="Image file to resize (JPEG, PNG or GIF)")],
        mode: Annotated[
            Literal["within", "exact"],
            Form(description="'within' fits a bounding box, 'exact' fills and crops"),
        ] = "within",
        width: Annotated[int | None, Form(gt=0, description="Width in pixels")] = None,
        height: Annotated[int | None, Form(gt=0, description="Height in pixels")] = None,
        quality: Annotated[
            int | None, Form(ge=1, le=100, description="JPEG quality (1-100)")
        ] = None,
        priority: Annotated[int, Form(ge=0, le=10, description="Job priority (0-10)")] = 5,
        user: Annotated[UserLike | None, Depends(get_current_user)] = None,
    ) -> JobCreatedResponse:
        # check the dimension combination before storing anything
        try:
            _ = ImageResizeParams(
                input_path="input",
                output_path="output",
                mode=mode,
                width=width,
                height=height,
                quality=quality,
            )
        except ValidationError as exc:
            raise HTTPException(
                status_code=422,
                detail=exc.errors(include_url=False, include_context=False, include_input=False),
            ) from exc

        return await create_job_from_upload(
            task_type="image_resize",
            repository=repository,
            file_storage=file_storage,
            file=file,
            priority=priority,
            user=user,
            output_type=ImageResizeOutput,
            params_factory=lambda path: ImageResizeParams(
                input_path=path,
                output_path=output_path_for(path, "resized"),
                mode=mode,
                width=width,
                height=height,
                quality=quality,
            ),
        )

    _ = create_resize_job
    return router
