"""Exception types for PR Reviewer."""


class PRReviewerError(Exception):
    """Base class for all PR Reviewer errors."""


class ConfigurationError(PRReviewerError):
    """Raised when required configuration or the event descriptor is missing or invalid."""


class AIUnavailableError(PRReviewerError):
    """Raised when the model endpoint fails or returns no usable text."""


class CommentPublishError(PRReviewerError):
    """Raised when the review comment could not be created or updated."""


class LabelUpdateError(PRReviewerError):
    """Raised when a label definition could not be updated."""

    def __init__(self, name: str, status: int | None = None, detail: str = "") -> None:
        self.name = name
        self.status = status
        message = f"Failed to update label '{name}'"
        if status is not None:
            message += f" (status {status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
