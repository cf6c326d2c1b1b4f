"""GitHub integration for PR Reviewer."""

from pr_reviewer.github.client import GitHubClient
from pr_reviewer.github.comments import COMMENT_MARKER, CommentPublisher
from pr_reviewer.github.event import PREvent, load_event
from pr_reviewer.github.labels import LabelReconciler, plan_label_changes, plan_label_definition

__all__ = [
    "COMMENT_MARKER",
    "CommentPublisher",
    "GitHubClient",
    "LabelReconciler",
    "PREvent",
    "load_event",
    "plan_label_changes",
    "plan_label_definition",
]
