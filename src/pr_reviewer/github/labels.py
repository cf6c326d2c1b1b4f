"""Review-state label reconciliation."""

import logging
from collections.abc import Iterable, Sequence

import requests

from pr_reviewer.errors import LabelUpdateError
from pr_reviewer.github.client import GitHubClient
from pr_reviewer.models.labels import (
    CANONICAL_LABELS,
    CHANGES_REQUESTED,
    READY_FOR_REVIEW,
    LabelAction,
    LabelChanges,
    LabelState,
)

logger = logging.getLogger(__name__)


def plan_label_changes(has_findings: bool, attached: Iterable[str]) -> LabelChanges:
    """Compute the minimal attach/detach operations for the target state.

    Membership is case-insensitive. Removals use the name exactly as it is
    attached so the API call matches the existing label.

    Args:
        has_findings: Review outcome
        attached: Names of labels currently on the PR

    Returns:
        LabelChanges (empty when the PR already matches the target)
    """
    by_lower = {name.lower(): name for name in attached}

    if has_findings:
        unwanted, wanted = READY_FOR_REVIEW, CHANGES_REQUESTED
    else:
        unwanted, wanted = CHANGES_REQUESTED, READY_FOR_REVIEW

    changes = LabelChanges()
    if unwanted.name.lower() in by_lower:
        changes.remove.append(by_lower[unwanted.name.lower()])
    if wanted.name.lower() not in by_lower:
        changes.add.append(wanted.name)
    return changes


def plan_label_definition(existing: Sequence[LabelState], desired: LabelState) -> LabelAction:
    """Decide how to bring a repository label definition to ``desired``."""
    for label in existing:
        if label.name.lower() == desired.name.lower():
            return LabelAction.NONE if label.matches(desired) else LabelAction.UPDATE
    return LabelAction.CREATE


class LabelReconciler:
    """Keeps the two review-state labels in sync with the review outcome."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    def sync_attached(
        self, pr_number: int, has_findings: bool, attached: Iterable[str]
    ) -> LabelChanges:
        """Attach/detach labels on the PR. Failures propagate."""
        changes = plan_label_changes(has_findings, attached)
        for name in changes.remove:
            self.client.remove_label(pr_number, name)
        if changes.add:
            self.client.add_labels(pr_number, changes.add)

        if changes.is_empty:
            logger.info("PR labels already reflect review state")
        else:
            logger.info("Labels were updated to reflect review state")
        return changes

    def ensure_definitions(
        self, labels: Sequence[LabelState] = CANONICAL_LABELS
    ) -> dict[str, LabelAction]:
        """Create or update repository label definitions.

        A failed update is logged as a warning and does not stop the run.

        Returns:
            Action taken per label name
        """
        existing = self.client.list_labels()
        actions: dict[str, LabelAction] = {}

        for desired in labels:
            action = plan_label_definition(existing, desired)
            if action is LabelAction.CREATE:
                self.client.create_label(desired)
            elif action is LabelAction.UPDATE:
                try:
                    self._update(desired)
                except LabelUpdateError as e:
                    logger.warning(f"Warning: {e}")
            actions[desired.name] = action

        return actions

    def _update(self, label: LabelState) -> None:
        try:
            response = self.client.patch_label(label)
        except requests.RequestException as e:
            raise LabelUpdateError(label.name, detail=str(e)) from e
        if not response.ok:
            raise LabelUpdateError(label.name, status=response.status_code, detail=response.text)

    def reconcile(
        self, pr_number: int, has_findings: bool, attached: Iterable[str]
    ) -> LabelChanges:
        """Sync attached labels, then ensure both label definitions."""
        changes = self.sync_attached(pr_number, has_findings, attached)
        self.ensure_definitions()
        return changes
