"""Domain entity for blog tags."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class Tag:
    """A label used to categorize blog posts.

    ``post_count`` is derived by the repository from the post/tag
    association and is never written by callers.
    """

    name: str
    color: str | None = None  # hex code, e.g. "#00ADD8"
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    post_count: int = 0

    def touch(self) -> None:
        """Refresh the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)
