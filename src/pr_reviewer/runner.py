"""Review run: fetch, decide, publish, reconcile.

A run is a single sequential pass. Each external call completes before the
next one starts. Errors other than an unavailable model, a failed comment
and a failed label-definition update propagate to the caller.
The model call is bounded only by the httpx client timeout
(`model.timeout_seconds`); no overall wall-clock budget wraps it.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pr_reviewer.config import Config
from pr_reviewer.github.client import GitHubClient
from pr_reviewer.github.comments import CommentPublisher
from pr_reviewer.github.event import load_event
from pr_reviewer.github.labels import LabelReconciler, plan_label_changes
from pr_reviewer.models.labels import LabelChanges
from pr_reviewer.models.review import ReviewResult
from pr_reviewer.review.ai import AIReviewer
from pr_reviewer.review.decision import decide_review
from pr_reviewer.review.diff import aggregate_diff
from pr_reviewer.review.heuristics import HeuristicReviewer
from pr_reviewer.review.prompt import load_prompt_template

logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    """What a review run did."""

    pr_number: int
    result: ReviewResult
    label_changes: LabelChanges
    comment_id: int | None = None
    files_reviewed: int = 0
    dry_run: bool = False


async def review_pull_request(
    config: Config,
    pr_number: int,
    use_ai: bool = True,
    dry_run: bool = False,
    github: GitHubClient | None = None,
    ai_reviewer: AIReviewer | None = None,
    on_status: Callable[..., Any] | None = None,
) -> RunOutcome:
    """Review a PR, post the review comment and sync the review-state labels.

    Args:
        config: Validated configuration
        pr_number: Pull request number
        use_ai: Ask the model first; False runs the heuristic review only
        dry_run: Decide but do not write comments or labels
        github: Optional pre-built GitHub client
        ai_reviewer: Optional pre-built AI reviewer
        on_status: Optional callback for progress messages

    Returns:
        RunOutcome describing the result and the label changes
    """

    def status(message: str) -> None:
        logger.debug(message)
        if on_status:
            on_status(message)

    gh = github or GitHubClient(
        config.github.token, config.github.repository, base_url=config.github.base_url
    )

    pr = gh.get_pull_request(pr_number)
    files = gh.get_changed_files(pr)
    attached = gh.get_label_names(pr)
    status(f"Fetched PR #{pr_number}: {len(files)} changed files")

    diff = aggregate_diff(files, max_patch_chars=config.review.max_patch_chars)

    ai_review = None
    if use_ai:
        prompt_template = load_prompt_template(config.review.prompt_path)
        reviewer = ai_reviewer or AIReviewer(config.model)
        status(f"Requesting AI review from {config.model.name}")
        ai_review = await reviewer.review(prompt_template, diff)

    findings = []
    if ai_review is None:
        heuristics = HeuristicReviewer(
            large_change_threshold=config.review.large_change_threshold,
            debug_print_call=config.review.debug_print_call,
        )
        findings = heuristics.review(files)

    result = decide_review(ai_review, findings)
    status(f"Review source: {result.source.value}, has findings: {result.has_findings}")

    if dry_run:
        return RunOutcome(
            pr_number=pr_number,
            result=result,
            label_changes=plan_label_changes(result.has_findings, attached),
            files_reviewed=len(files),
            dry_run=True,
        )

    publisher = CommentPublisher(gh, update_existing=config.review.update_existing_comment)
    comment_id = publisher.publish(pr_number, result.body)

    changes = LabelReconciler(gh).reconcile(pr_number, result.has_findings, attached)

    return RunOutcome(
        pr_number=pr_number,
        result=result,
        label_changes=changes,
        comment_id=comment_id,
        files_reviewed=len(files),
    )


async def review_from_event(
    config: Config,
    use_ai: bool = True,
    dry_run: bool = False,
    on_status: Callable[..., Any] | None = None,
) -> RunOutcome:
    """Run a review for the PR named by the GitHub Actions event file."""
    event = load_event(config.github.event_path)
    logger.info(f"Reviewing PR #{event.number} in {config.github.repository}")
    return await review_pull_request(
        config, event.number, use_ai=use_ai, dry_run=dry_run, on_status=on_status
    )
