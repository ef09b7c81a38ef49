"""Image edit route factory."""

from typing import Annotated, Callable

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from ...common.job_creator import create_job_from_upload
from ...common.job_repository import JobRepository
from ...common.job_storage import JobStorage
from ...common.schema_job_record import JobCreatedResponse
from ...common.user import UserLike
from ..image_resize.routes import output_path_for
from .schema import EditOperationList, ImageEditOutput, ImageEditParams


def create_router(
    repository: JobRepository,
    file_storage: JobStorage,
    get_current_user: Callable[[], UserLike | None],
) -> APIRouter:
    """Create router with injected dependencies."""
    router = APIRouter()

    @router.post("/jobs/image_edit", response_model=JobCreatedResponse)
    async def create_edit_job(
        file: Annotated[UploadFile, File(description="Image file to edit (JPEG, PNG or GIF)")],
        operations: Annotated[
            str,
            Form(
                description='JSON list of operations, e.g. [{"op": "rotate", "direction": "clockwise"}]'
            ),
        ],
        quality: Annotated[
            int | None, Form(ge=1, le=100, description="JPEG quality (1-100)")
        ] = None,
        priority: Annotated[int, Form(ge=0, le=10, description="Job priority (0-10)")] = 5,
        user: Annotated[UserLike | None, Depends(get_current_user)] = None,
    ) -> JobCreatedResponse:
        try:
            parsed = EditOperationList.validate_json(operations)
        except ValidationError as exc:
            raise HTTPException(
                status_code=422,
                detail=exc.errors(include_url=False, include_context=False, include_input=False),
            ) from exc

        if not parsed:
            raise HTTPException(status_code=422, detail="At least one operation is required")

        return await create_job_from_upload(
            task_type="image_edit",
            repository=repository,
            file_storage=file_storage,
            file=file,
            priority=priority,
            user=user,
            output_type=ImageEditOutput,
            params_factory=lambda path: ImageEditParams(
                input_path=path,
                output_path=output_path_for(path, "edited"),
                operations=parsed,
                quality=quality,
            ),
        )

    _ = create_edit_job
    return router
