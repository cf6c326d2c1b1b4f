"""Review result models."""

from dataclasses import dataclass
from enum import Enum


class ReviewSource(Enum):
    """Which decision path produced the review body."""

    AI = "ai"
    HEURISTIC = "heuristic"
    CLEAN = "clean"


@dataclass(frozen=True)
class AIReview:
    """Text returned by the model, with an optional explicit verdict."""

    body: str
    has_findings: bool | None = None  # None when the model gave free-form text only


@dataclass(frozen=True)
class ReviewResult:
    """Final review outcome for a run."""

    body: str
    has_findings: bool
    source: ReviewSource
