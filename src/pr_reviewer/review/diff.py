"""Size-bounded diff aggregation for model input."""

from collections.abc import Iterable

from pr_reviewer.models.files import ChangedFile

MAX_PATCH_CHARS = 8000
TRUNCATION_MARKER = "\n...[truncated]"


def truncate_patch(patch: str, limit: int = MAX_PATCH_CHARS) -> str:
    """Cut a patch to ``limit`` characters, appending the truncation marker."""
    if len(patch) > limit:
        return patch[:limit] + TRUNCATION_MARKER
    return patch


def aggregate_diff(files: Iterable[ChangedFile], max_patch_chars: int = MAX_PATCH_CHARS) -> str:
    """Build the textual diff sent to the model.

    Each file with a patch contributes a ``# File: <path>`` header, its
    (possibly truncated) patch and a blank separator line. Files without a
    patch are skipped. Input order is kept.

    Args:
        files: Changed files in listing order
        max_patch_chars: Per-file patch limit

    Returns:
        Aggregated diff text ("" when no file has a patch)
    """
    parts = []
    for file in files:
        if not file.has_patch:
            continue
        parts.append(f"# File: {file.path}\n")
        parts.append(truncate_patch(file.patch, max_patch_chars) + "\n")
        parts.append("\n")
    return "".join(parts)
