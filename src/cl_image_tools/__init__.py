"""cl_image_tools - Resize planning, image editing and image job processing."""

from .common.compute_module import ComputeModule
from .common.config import EditorSettings, configure, get_settings
from .common.errors import InvalidArgumentError, UnsupportedImageTypeError
from .common.file_storage_impl import LocalFileStorage
from .common.job_repository import JobRepository
from .common.job_storage import AsyncFileLike, FileLike, JobStorage, SavedJobFile
from .common.schema_job import BaseJobParams, Job, TaskOutput
from .common.schema_job_record import JobRecord, JobRecordUpdate, JobStatus
from .editor import (
    CropAxis,
    ImageEditor,
    ImageFormat,
    NoChange,
    ResizePlan,
    Scaled,
    ScaledWithCrop,
    Size,
    plan_fit_exact,
    plan_fit_within,
)
from .master import create_master_router
from .worker import Worker

__version__ = "0.1.0"

__all__ = [
    "Job",
    "BaseJobParams",
    "TaskOutput",
    "JobRecord",
    "JobRecordUpdate",
    "JobStatus",
    "AsyncFileLike",
    "FileLike",
    "SavedJobFile",
    "ComputeModule",
    "JobRepository",
    "JobStorage",
    "LocalFileStorage",
    "EditorSettings",
    "configure",
    "get_settings",
    "InvalidArgumentError",
    "UnsupportedImageTypeError",
    "Size",
    "CropAxis",
    "NoChange",
    "Scaled",
    "ScaledWithCrop",
    "ResizePlan",
    "plan_fit_within",
    "plan_fit_exact",
    "ImageEditor",
    "ImageFormat",
    "__version__",
    "Worker",
    "create_master_router",
]
