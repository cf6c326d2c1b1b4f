"""Publishing the single review comment on a PR."""

import logging
from collections.abc import Callable

import requests
from github.GithubException import GithubException
from github.IssueComment import IssueComment

from pr_reviewer.errors import CommentPublishError
from pr_reviewer.github.client import GitHubClient

logger = logging.getLogger(__name__)

# Hidden marker identifying the comment this tool owns
COMMENT_MARKER = "<!-- pr-reviewer -->"


def with_marker(body: str) -> str:
    """Prefix the review body with the hidden marker."""
    return f"{COMMENT_MARKER}\n{body}"


class CommentPublisher:
    """Creates or updates the PR's review comment."""

    def __init__(self, client: GitHubClient, update_existing: bool = True) -> None:
        """Initialize the publisher.

        Args:
            client: GitHub client
            update_existing: Edit a previous review comment in place instead of adding one
        """
        self.client = client
        self.update_existing = update_existing

    def find_existing(self, pr_number: int) -> IssueComment | None:
        """Return the most recent marked comment written by the token's identity.

        Marked comments by anyone else (quotes, an earlier bot identity) are
        never edited.
        """
        login = self.client.get_authenticated_login().lower()
        for comment in reversed(self.client.list_comments(pr_number)):
            author = comment.user.login.lower() if comment.user else None
            if author == login and COMMENT_MARKER in (comment.body or ""):
                return comment
        return None

    def publish(self, pr_number: int, body: str) -> int | None:
        """Post the review body.

        Comment failures are logged and do not stop the run; only
        unexpected exception types propagate.

        Returns:
            The comment id, or None if publishing failed
        """
        try:
            return self._publish(pr_number, with_marker(body))
        except CommentPublishError as e:
            logger.error(f"Could not publish review comment: {e}")
            return None

    def _publish(self, pr_number: int, body: str) -> int | None:
        existing: IssueComment | None = None
        if self.update_existing:
            try:
                existing = self.find_existing(pr_number)
            except GithubException as e:
                logger.warning(f"Could not list comments on #{pr_number} ({e.status})")

        if existing is not None:
            try:
                return self._edit(pr_number, existing, body)
            except CommentPublishError as e:
                logger.warning(f"{e}; posting a new review comment instead")

        return self._create(pr_number, body)

    def _edit(self, pr_number: int, comment: IssueComment, body: str) -> int | None:
        try:
            comment_id = self.client.edit_comment(comment, body)
        except GithubException as e:
            logger.warning(f"Comment API call failed ({e.status}); trying direct REST call")
            return self._rest("update", self.client.rest_edit_comment, comment.id, body)
        logger.info(f"Updated review comment {comment_id} on #{pr_number}")
        return comment_id

    def _create(self, pr_number: int, body: str) -> int | None:
        try:
            comment_id = self.client.create_comment(pr_number, body)
        except GithubException as e:
            logger.warning(f"Comment API call failed ({e.status}); trying direct REST call")
            return self._rest("creation", self.client.rest_create_comment, pr_number, body)
        logger.info(f"Created review comment {comment_id} on #{pr_number}")
        return comment_id

    def _rest(
        self, action: str, call: Callable[[int, str], requests.Response], target: int, body: str
    ) -> int | None:
        try:
            response = call(target, body)
        except requests.RequestException as e:
            raise CommentPublishError(f"Fallback REST comment {action} request failed: {e}") from e

        if not response.ok:
            raise CommentPublishError(
                f"Fallback REST comment {action} failed. Status: {response.status_code}. "
                f"Response: {response.text}"
            )

        try:
            comment_id = response.json().get("id")
        except ValueError:
            comment_id = None
        logger.info(f"Published review comment {comment_id} via REST ({action})")
        return comment_id
