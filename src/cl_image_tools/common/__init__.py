"""Common module - protocols, schemas, and base classes."""

from .compute_module import ComputeModule
from .errors import InvalidArgumentError, UnsupportedImageTypeError
from .job_repository import JobRepository
from .job_storage import JobStorage
from .schema_job import BaseJobParams, Job, TaskOutput

__all__ = [
    "Job",
    "BaseJobParams",
    "TaskOutput",
    "ComputeModule",
    "JobRepository",
    "JobStorage",
    "InvalidArgumentError",
    "UnsupportedImageTypeError",
]
