from typing import Protocol


class UserLike(Protocol):
    """Protocol for user objects returned by the application's authentication."""

    id: str | None
