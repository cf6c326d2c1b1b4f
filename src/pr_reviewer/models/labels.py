"""Label models and the canonical review-state labels."""

import re
from dataclasses import dataclass, field
from enum import Enum

_COLOR_RE = re.compile(r"^[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class LabelState:
    """A repository label definition."""

    name: str
    color: str  # 6 hex digits, no leading '#'
    description: str = ""

    def __post_init__(self) -> None:
        """Validate label color."""
        if not _COLOR_RE.match(self.color):
            raise ValueError(f"Label color must be 6 hex digits, got {self.color!r}")

    def matches(self, other: "LabelState") -> bool:
        """Check whether color and description already agree with ``other``."""
        return (
            self.color.lower() == other.color.lower()
            and (self.description or "") == (other.description or "")
        )


CHANGES_REQUESTED = LabelState(
    name="Changes Requested",
    color="f9d71c",
    description="Automated review found suggestions to address",
)
READY_FOR_REVIEW = LabelState(
    name="Ready for Review",
    color="28a745",
    description="Automated review found no issues",
)
CANONICAL_LABELS = (CHANGES_REQUESTED, READY_FOR_REVIEW)


class LabelAction(Enum):
    """Action needed to bring a label definition to its canonical form."""

    NONE = "none"
    CREATE = "create"
    UPDATE = "update"


@dataclass
class LabelChanges:
    """Labels to attach to and detach from a PR."""

    add: list[str] = field(default_factory=list)
    remove: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.add and not self.remove
