"""
JobStorage Protocol - interface for job-scoped image file storage.

Design goals:
- Hide internal folder structure
- Support async uploads
- Hand out real filesystem paths, since Pillow reads and writes files
- Keep storage as the single authority over paths
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class JobStorageError(Exception):
    """Base class for storage-related errors."""


class JobDirectoryCreationError(JobStorageError):
    def __init__(self, job_id: str | int):
        self.job_id: str | int = job_id
        super().__init__(f"Failed to create storage directory for job '{job_id}'")


class SavedJobFile(BaseModel):
    """Metadata of a saved job file."""

    relative_path: str = Field(
        ...,
        description="Relative path of the saved file within the job storage",
    )
    size: int = Field(
        ...,
        ge=0,
        description="File size in bytes",
    )
    hash: str | None = Field(
        None,
        description="SHA256 of the file content",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


class AsyncFileLike(Protocol):
    """Minimal async file-like interface (e.g. FastAPI UploadFile)."""

    async def read(self, size: int, /) -> bytes: ...


FileLike = AsyncFileLike | bytes | str | PathLike[str]


@runtime_checkable
class JobStorage(Protocol):
    """
    Protocol for job-scoped file storage.

    Implementations own the storage root, the directory layout and the
    lifecycle of job directories. Callers interact ONLY via job_id and
    relative paths.
    """

    def create_directory(self, job_id: str) -> None:
        """Create the storage directory for a job (no-op if it exists)."""
        ...

    def remove(self, job_id: str) -> bool:
        """Remove all files of a job. Returns False if nothing was removed."""
        ...

    async def save(
        self,
        job_id: str,
        relative_path: str,
        file: FileLike,
        *,
        mkdirs: bool = True,
    ) -> SavedJobFile:
        """
        Save a file into job storage.

        `file` may be an async file-like object, raw bytes, or the path of an
        existing file (copied).
        """
        ...

    def allocate_path(
        self,
        job_id: str,
        relative_path: str,
        *,
        mkdirs: bool = True,
    ) -> Path:
        """Allocate a filesystem path the caller will write to."""
        ...

    def resolve_path(
        self,
        job_id: str,
        relative_path: str | None = None,
    ) -> Path:
        """Resolve a job-relative path to an absolute filesystem path."""
        ...
