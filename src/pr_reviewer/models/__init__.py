"""Data models for PR Reviewer."""

from pr_reviewer.models.files import ChangedFile, FileStatus
from pr_reviewer.models.findings import CATEGORY_SUGGESTIONS, Finding, FindingCategory
from pr_reviewer.models.labels import (
    CANONICAL_LABELS,
    CHANGES_REQUESTED,
    READY_FOR_REVIEW,
    LabelAction,
    LabelChanges,
    LabelState,
)
from pr_reviewer.models.review import AIReview, ReviewResult, ReviewSource

__all__ = [
    "AIReview",
    "CANONICAL_LABELS",
    "CATEGORY_SUGGESTIONS",
    "CHANGES_REQUESTED",
    "ChangedFile",
    "FileStatus",
    "Finding",
    "FindingCategory",
    "LabelAction",
    "LabelChanges",
    "LabelState",
    "READY_FOR_REVIEW",
    "ReviewResult",
    "ReviewSource",
]
