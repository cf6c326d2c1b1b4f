"""Heuristic review used when the AI review is unavailable."""

import logging
from collections.abc import Iterable

from pr_reviewer.models.files import ChangedFile, FileStatus
from pr_reviewer.models.findings import Finding, FindingCategory

logger = logging.getLogger(__name__)

HEURISTIC_HEADER = "👋 Automated Heuristic Review (AI unavailable):"
NO_FINDINGS_MESSAGE = "✅ No heuristic findings."

# Only these statuses carry new content worth scanning
SCANNED_STATUSES = frozenset({FileStatus.ADDED, FileStatus.MODIFIED})


class HeuristicReviewer:
    """Scans added lines for simple risk signals."""

    def __init__(
        self,
        large_change_threshold: int = 400,
        debug_print_call: str = "print(",
        todo_marker: str = "TODO",
    ) -> None:
        """Initialize the reviewer.

        Args:
            large_change_threshold: Added-line count above which a file is flagged
            debug_print_call: Literal console-print call to flag
            todo_marker: Literal marker to flag
        """
        self.large_change_threshold = large_change_threshold
        self.debug_print_call = debug_print_call
        self.todo_marker = todo_marker

    def review(self, files: Iterable[ChangedFile]) -> list[Finding]:
        """Collect findings for all scannable files (not deduplicated)."""
        findings: list[Finding] = []
        for file in files:
            if file.status not in SCANNED_STATUSES or not file.has_patch:
                continue
            findings.extend(self.review_file(file))

        logger.debug(f"Heuristic scan produced {len(findings)} raw findings")
        return findings

    def review_file(self, file: ChangedFile) -> list[Finding]:
        """Apply every rule to one file's patch."""
        if not file.has_patch:
            return []

        # Plain prefix test; not hunk-aware
        added = [line for line in file.patch.split("\n") if line.startswith("+")]
        findings: list[Finding] = []

        if len(added) > self.large_change_threshold:
            findings.append(
                Finding(
                    category=FindingCategory.LARGE_CHANGE,
                    file=file.path,
                    message=f"File `{file.path}` adds {len(added)} lines.",
                )
            )

        for line in added:
            if self.todo_marker in line:
                findings.append(
                    Finding(
                        category=FindingCategory.TODO_MARKER,
                        file=file.path,
                        message=f"File `{file.path}` adds a {self.todo_marker} marker.",
                    )
                )
            if self.debug_print_call in line:
                findings.append(
                    Finding(
                        category=FindingCategory.DEBUG_PRINT,
                        file=file.path,
                        message=f"File `{file.path}` calls `{self.debug_print_call}` directly.",
                    )
                )

        return findings


def dedupe_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Drop findings whose message was already seen, keeping first occurrences."""
    seen: set[str] = set()
    unique = []
    for finding in findings:
        if finding.message in seen:
            continue
        seen.add(finding.message)
        unique.append(finding)
    return unique


def render_findings(findings: Iterable[Finding]) -> str:
    """Render findings as a numbered Markdown list with suggestions."""
    unique = dedupe_findings(findings)
    if not unique:
        return NO_FINDINGS_MESSAGE

    lines = [HEURISTIC_HEADER, ""]
    for i, finding in enumerate(unique, 1):
        lines.append(f"{i}. {finding.message}")
        lines.append(f"   - Suggestion: {finding.suggestion}")
    lines.append("")
    return "\n".join(lines)
