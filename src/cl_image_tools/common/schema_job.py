from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .schema_job_record import JobRecord, JobStatus


class BaseJobParams(BaseModel):
    input_path: str = Field(description="job-relative path of the source image")
    output_path: str = Field(description="job-relative path of the produced image")


class TaskOutput(BaseModel):
    pass


P = TypeVar("P", bound=BaseJobParams)
Q = TypeVar("Q", bound=TaskOutput)


class Job(BaseModel, Generic[P, Q]):
    """Runtime, strongly-typed job."""

    job_id: str
    task_type: str

    params: P
    output: Q | None = None

    status: JobStatus = JobStatus.queued
    progress: int = Field(0, ge=0, le=100)
    error_message: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)

    def to_record(self) -> JobRecord:
        return JobRecord(
            job_id=self.job_id,
            task_type=self.task_type,
            params=self.params.model_dump(mode="json"),
            output=self.output.model_dump(mode="json") if self.output is not None else None,
            status=self.status,
            progress=self.progress,
            error_message=self.error_message,
        )
