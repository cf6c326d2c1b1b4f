"""Changed file models."""

from dataclasses import dataclass
from enum import Enum


class FileStatus(Enum):
    """Status of a file within a pull request."""

    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    RENAMED = "renamed"
    UNCHANGED = "unchanged"

    @classmethod
    def from_github(cls, status: str) -> "FileStatus":
        """Map a GitHub file status to a FileStatus.

        GitHub also reports ``copied`` and ``changed``; both carry content
        changes and are treated as modifications.
        """
        try:
            return cls(status.lower())
        except ValueError:
            return cls.MODIFIED


@dataclass(frozen=True)
class ChangedFile:
    """Snapshot of one changed file, fetched once per run."""

    path: str
    status: FileStatus
    patch: str | None = None  # None for binary or oversized files

    @property
    def has_patch(self) -> bool:
        return self.patch is not None
