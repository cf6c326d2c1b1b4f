"""PR Reviewer - AI pull request review with review-state labels."""

__version__ = "0.1.0"
