"""Choose the review body and classify the outcome."""

import logging
from collections.abc import Iterable

from pr_reviewer.models.findings import Finding
from pr_reviewer.models.review import AIReview, ReviewResult, ReviewSource
from pr_reviewer.review.heuristics import dedupe_findings, render_findings

logger = logging.getLogger(__name__)

CLEAN_MESSAGE = "✅ No automated review comments found. (AI unavailable; heuristic scan clean.)"

# Phrases in free-form AI text that mean "nothing to fix"
CLEAN_PHRASES = ("no significant issues", "✅ no")


def classify_clean(body: str) -> bool:
    """Check whether free-form review text reports a clean result."""
    lowered = body.lower()
    return any(phrase in lowered for phrase in CLEAN_PHRASES)


def decide_review(ai_review: AIReview | None, findings: Iterable[Finding]) -> ReviewResult:
    """Produce the single ReviewResult for a run.

    Priority: AI text, then heuristic findings, then the clean message.

    Args:
        ai_review: The AI review, or None when the model was unavailable
        findings: Heuristic findings (deduplicated here)

    Returns:
        ReviewResult with body, classification and source
    """
    if ai_review is not None and ai_review.body.strip():
        if ai_review.has_findings is not None:
            has_findings = ai_review.has_findings
        else:
            has_findings = not classify_clean(ai_review.body)
        logger.info(f"Using AI review (has findings: {has_findings})")
        return ReviewResult(
            body=ai_review.body.strip(),
            has_findings=has_findings,
            source=ReviewSource.AI,
        )

    unique = dedupe_findings(findings)
    if unique:
        logger.info(f"Using heuristic review with {len(unique)} findings")
        return ReviewResult(
            body=render_findings(unique),
            has_findings=True,
            source=ReviewSource.HEURISTIC,
        )

    logger.info("AI unavailable and heuristic scan clean")
    return ReviewResult(body=CLEAN_MESSAGE, has_findings=False, source=ReviewSource.CLEAN)
