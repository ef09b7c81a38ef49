"""Worker runtime - orchestrates image job execution."""

from importlib.metadata import entry_points
from typing import cast

from loguru import logger

from .common.compute_module import ComputeModule
from .common.job_repository import JobRepository
from .common.job_storage import JobStorage
from .common.schema_job import BaseJobParams, TaskOutput
from .common.schema_job_record import JobRecordUpdate, JobStatus

TASKS_ENTRY_POINT_GROUP = "cl_image_tools.tasks"

TaskRegistry = dict[str, ComputeModule[BaseJobParams, TaskOutput]]


def get_task_registry() -> TaskRegistry:
    """Dynamically load all tasks from entry points.

    Discovers tasks from [project.entry-points."cl_image_tools.tasks"]
    in pyproject.toml.

    Returns:
        Dict mapping task_type -> ComputeModule instance

    Raises:
        RuntimeError: If a plugin fails to load (missing dependency, etc.)
    """
    registry: TaskRegistry = {}
    eps = entry_points(group=TASKS_ENTRY_POINT_GROUP)

    for ep in eps:
        try:
            task_class = cast(type[ComputeModule[BaseJobParams, TaskOutput]], ep.load())
            task = task_class()
            registry[task.task_type] = task
        except Exception as e:
            # Plugin dependency missing = exception (fail fast)
            raise RuntimeError(f"Failed to load task '{ep.name}': {e}") from e

    return registry


class Worker:
    """Worker runtime that orchestrates job execution.

    Responsibilities:
    - Maintains task registry (auto-discovered from entry points)
    - Claims jobs from the repository (atomic claim prevents race conditions)
    - Only requests task types it has a handler for
    - Dispatches jobs to the matching ComputeModule and records the outcome

    Example:
        worker = Worker(repository, LocalFileStorage("./media"))

        while True:
            if not await worker.run_once():
                await asyncio.sleep(1.0)
    """

    def __init__(
        self,
        repository: JobRepository,
        job_storage: JobStorage,
        task_registry: TaskRegistry | None = None,
    ):
        """Initialize worker.

        Args:
            repository: JobRepository implementation
            job_storage: JobStorage the tasks read inputs from and write outputs to
            task_registry: Optional custom registry. If None, auto-discovers from entry points.
        """
        self.repository: JobRepository = repository
        self.job_storage: JobStorage = job_storage
        self.task_registry: TaskRegistry = (
            task_registry if task_registry is not None else get_task_registry()
        )

    def get_supported_task_types(self) -> list[str]:
        return list(self.task_registry.keys())

    async def run_once(self, task_types: list[str] | None = None) -> bool:
        """Process one job and return.

        Args:
            task_types: Task types to process. If None, uses all registered task types.

        Returns:
            True if a job was processed (successfully or not), False if none was available.
        """
        if task_types is None:
            valid_types = self.get_supported_task_types()
        else:
            valid_types = [t for t in task_types if t in self.task_registry]

        if not valid_types:
            return False

        job_record = self.repository.fetch_next_job(valid_types)
        if not job_record:
            return False

        task = self.task_registry[job_record.task_type]
        job_id = job_record.job_id

        def progress_callback(pct: int) -> None:
            # 100 is reserved for the final update
            _ = self.repository.update_job(job_id, JobRecordUpdate(progress=min(99, pct)))

        logger.info(f"Processing {job_record.task_type} job {job_id}")
        try:
            result = await task.execute(job_record, self.job_storage, progress_callback)
        except Exception as e:
            logger.error(f"Job {job_id} crashed: {e}")
            result = JobRecordUpdate(status=JobStatus.error, error_message=str(e), progress=100)

        _ = self.repository.update_job(job_id, result)
        logger.info(f"Job {job_id} finished with status {result.status}")
        return True
