"""Finding models for heuristic review results."""

from dataclasses import dataclass
from enum import Enum


class FindingCategory(Enum):
    """Categories of heuristic findings."""

    LARGE_CHANGE = "large-change"
    TODO_MARKER = "todo-marker"
    DEBUG_PRINT = "debug-print"


# Suggestion appended under each rendered finding
CATEGORY_SUGGESTIONS: dict[FindingCategory, str] = {
    FindingCategory.LARGE_CHANGE: "Consider splitting this PR into smaller, focused changes.",
    FindingCategory.TODO_MARKER: "Link the TODO to a tracked issue or resolve it before merging.",
    FindingCategory.DEBUG_PRINT: (
        "Route output through the `logging` module instead of printing to stdout."
    ),
}


@dataclass(frozen=True)
class Finding:
    """A single heuristic-detected issue.

    The message embeds the file path, so two findings are duplicates
    exactly when their messages are equal.
    """

    category: FindingCategory
    file: str
    message: str

    @property
    def suggestion(self) -> str:
        return CATEGORY_SUGGESTIONS[self.category]
