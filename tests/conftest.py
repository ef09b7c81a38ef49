"""Test configuration and fixtures for cl_image_tools.

This module provides:
- Pytest configuration (storage ini option)
- Function-scoped fixtures (synthetic images, settings reset)
- Integration fixtures (in-memory repository, storage, worker, API client)
"""

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import override

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from cl_image_tools.common import config
from cl_image_tools.common.job_repository import JobRepository
from cl_image_tools.common.schema_job_record import JobRecord, JobRecordUpdate, JobStatus

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_addoption(parser):
    """Add custom ini values."""
    parser.addini(
        "test_storage_base_dir",
        help="Base directory for test storage (default: per-test tmp dir)",
        default="",
    )


@pytest.fixture(autouse=True)
def reset_settings() -> Iterator[None]:
    """Every test starts from settings loaded from the environment."""
    config.configure(None)
    yield
    config.configure(None)


# ============================================================================
# Image Fixtures
# ============================================================================


def make_image(
    path: Path,
    size: tuple[int, int],
    fmt: str = "JPEG",
    mode: str = "RGB",
    color: tuple[int, ...] = (73, 109, 137),
) -> Path:
    """Write a synthetic image with a grid and a centred ellipse."""
    img = Image.new(mode, size, color=color)
    draw = ImageDraw.Draw(img)
    width, height = size

    for x in range(0, width, 50):
        draw.line([(x, 0), (x, height)], fill="white", width=2)
    for y in range(0, height, 50):
        draw.line([(0, y), (width, y)], fill="white", width=2)
    draw.ellipse([width // 4, height // 4, width * 3 // 4, height * 3 // 4], fill="red")

    save_kwargs: dict[str, object] = {"quality": 90} if fmt == "JPEG" else {}
    img.save(path, fmt, **save_kwargs)
    return path


@pytest.fixture
def image_factory(tmp_path: Path):
    """Write extra synthetic images: ``image_factory("name.bmp", (20, 20), fmt="BMP")``."""

    def _make(name: str, size: tuple[int, int], **kwargs) -> Path:
        return make_image(tmp_path / name, size, **kwargs)

    return _make


@pytest.fixture
def synthetic_image(tmp_path: Path) -> Path:
    """800x600 JPEG."""
    return make_image(tmp_path / "synthetic.jpg", (800, 600))


@pytest.fixture
def square_image(tmp_path: Path) -> Path:
    """256x256 JPEG."""
    return make_image(tmp_path / "square.jpg", (256, 256))


@pytest.fixture
def png_image(tmp_path: Path) -> Path:
    """300x200 RGBA PNG, half transparent."""
    return make_image(
        tmp_path / "alpha.png", (300, 200), fmt="PNG", mode="RGBA", color=(0, 128, 255, 128)
    )


@pytest.fixture
def gif_image(tmp_path: Path) -> Path:
    """120x80 GIF."""
    return make_image(tmp_path / "anim.gif", (120, 80), fmt="GIF")


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "dummy.txt"
    path.write_text("not an image\n")
    return path


# ============================================================================
# Mock Service Fixtures
# ============================================================================


class InMemoryJobRepository(JobRepository):
    """In-memory implementation for testing."""

    def __init__(self) -> None:
        self._jobs: dict[str, JobRecord] = {}
        self.progress_updates: list[int] = []

    def get(self, job_id: str) -> JobRecord | None:
        return self._jobs.get(job_id)

    @override
    def add_job(
        self,
        job: JobRecord,
        created_by: str | None = None,
        priority: int | None = None,
    ) -> bool:
        self._jobs[job.job_id] = job
        return True

    @override
    def get_job(self, job_id: str) -> JobRecord | None:
        return self._jobs.get(job_id)

    @override
    def update_job(self, job_id: str, updates: JobRecordUpdate) -> bool:
        job = self._jobs.get(job_id)
        if job is None:
            return False
        changes = updates.model_dump(exclude_none=True)
        if updates.progress is not None:
            self.progress_updates.append(updates.progress)
        self._jobs[job_id] = job.model_copy(update=changes)
        return True

    @override
    def fetch_next_job(self, task_types: Sequence[str]) -> JobRecord | None:
        for job_id, job in self._jobs.items():
            if job.status == JobStatus.queued and job.task_type in task_types:
                claimed = job.model_copy(update={"status": JobStatus.processing})
                self._jobs[job_id] = claimed
                return claimed
        return None


@pytest.fixture
def job_repository() -> InMemoryJobRepository:
    """Provide in-memory job repository for testing."""
    return InMemoryJobRepository()


@pytest.fixture
def file_storage(tmp_path: Path, pytestconfig):
    """Provide file storage for testing.

    Configuration priority:
    1. pytest ini test_storage_base_dir option
    2. Default: tmp_path / "file_storage"
    """
    from cl_image_tools.common.file_storage_impl import LocalFileStorage

    ini_storage = pytestconfig.getini("test_storage_base_dir")
    storage_dir = Path(ini_storage) if ini_storage else tmp_path / "file_storage"
    storage_dir.mkdir(parents=True, exist_ok=True)

    return LocalFileStorage(base_dir=storage_dir)


@pytest.fixture
def task_registry():
    from cl_image_tools.plugins.image_edit.task import ImageEditTask
    from cl_image_tools.plugins.image_resize.task import ImageResizeTask

    tasks = [ImageResizeTask(), ImageEditTask()]
    return {task.task_type: task for task in tasks}


@pytest.fixture
def worker(job_repository, file_storage, task_registry):
    """Provide Worker instance for integration tests."""
    from cl_image_tools import Worker

    return Worker(
        repository=job_repository,
        job_storage=file_storage,
        task_registry=task_registry,
    )


@pytest.fixture
def api_client(job_repository, file_storage):
    """Provide FastAPI TestClient for route testing."""
    from fastapi import FastAPI

    from cl_image_tools import create_master_router
    from cl_image_tools.plugins.image_edit.routes import create_router as create_edit_router
    from cl_image_tools.plugins.image_resize.routes import create_router as create_resize_router

    app = FastAPI()

    def get_current_user():
        return None

    router = create_master_router(
        repository=job_repository,
        file_storage=file_storage,
        get_current_user=get_current_user,
        route_factories=[create_resize_router, create_edit_router],
    )

    app.include_router(router)

    return TestClient(app)
