"""Master module - dynamic route aggregator for FastAPI."""

from collections.abc import Sequence
from importlib.metadata import entry_points
from typing import Callable, cast

from fastapi import APIRouter

from .common.job_repository import JobRepository
from .common.job_storage import JobStorage
from .common.user import UserLike

ROUTES_ENTRY_POINT_GROUP = "cl_image_tools.routes"

# Type alias for route factory functions loaded from entry points
RouteFactory = Callable[
    [JobRepository, JobStorage, Callable[[], UserLike | None]],
    APIRouter,
]


def _discover_route_factories() -> list[RouteFactory]:
    factories: list[RouteFactory] = []
    for ep in entry_points(group=ROUTES_ENTRY_POINT_GROUP):
        try:
            factories.append(cast(RouteFactory, ep.load()))
        except Exception as e:
            # Plugin dependency missing = exception (fail fast)
            raise RuntimeError(f"Failed to load plugin '{ep.name}': {e}") from e
    return factories


def create_master_router(
    repository: JobRepository,
    file_storage: JobStorage,
    get_current_user: Callable[[], UserLike | None],
    route_factories: Sequence[RouteFactory] | None = None,
) -> APIRouter:
    """Aggregate all plugin routes into one router.

    Args:
        repository: JobRepository implementation for job persistence
        file_storage: JobStorage implementation for uploaded and produced images
        get_current_user: Callable dependency for authentication.
                          Should return user object or None.
        route_factories: Factories to mount. If None, discovers them from
                         [project.entry-points."cl_image_tools.routes"].

    Returns:
        Combined APIRouter with all plugin routes

    Raises:
        RuntimeError: If a plugin fails to load (missing dependency, etc.)

    Example:
        app = FastAPI()
        app.include_router(
            create_master_router(repository, LocalFileStorage("./media"), get_current_user),
            prefix="/api",
        )
    """
    master = APIRouter()

    factories = route_factories if route_factories is not None else _discover_route_factories()
    for create_router in factories:
        master.include_router(create_router(repository, file_storage, get_current_user))

    return master


def get_available_plugins() -> list[str]:
    """Names of the route plugins registered as entry points."""
    eps = entry_points(group=ROUTES_ENTRY_POINT_GROUP)
    return [ep.name for ep in eps]
