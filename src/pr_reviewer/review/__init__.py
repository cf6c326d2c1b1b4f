"""Review components: diff aggregation, AI and heuristic review, decision."""

from pr_reviewer.review.ai import AIReviewer, ModelClient
from pr_reviewer.review.decision import classify_clean, decide_review
from pr_reviewer.review.diff import aggregate_diff, truncate_patch
from pr_reviewer.review.heuristics import HeuristicReviewer, dedupe_findings, render_findings
from pr_reviewer.review.prompt import load_prompt_template

__all__ = [
    "AIReviewer",
    "HeuristicReviewer",
    "ModelClient",
    "aggregate_diff",
    "classify_clean",
    "decide_review",
    "dedupe_findings",
    "load_prompt_template",
    "render_findings",
    "truncate_patch",
]
