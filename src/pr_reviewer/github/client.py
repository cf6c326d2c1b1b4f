"""GitHub API client for PR, label and comment operations."""

import logging
from urllib.parse import quote

import requests
from github import Auth, Github
from github.GithubException import GithubException
from github.Issue import Issue
from github.IssueComment import IssueComment
from github.PullRequest import PullRequest
from github.Repository import Repository

from pr_reviewer.models.files import ChangedFile, FileStatus
from pr_reviewer.models.labels import LabelState

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
USER_AGENT = "pr-reviewer/0.1"
REST_TIMEOUT_SECONDS = 30
# Author of comments made with the Actions GITHUB_TOKEN
ACTIONS_BOT_LOGIN = "github-actions[bot]"


class GitHubClient:
    """Client for the GitHub operations a review run needs."""

    def __init__(self, token: str, repository: str, base_url: str | None = None) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub token
            repository: Repository in "owner/name" format
            base_url: Optional base URL for GitHub Enterprise
        """
        self._token = token
        self.repository = repository
        self._api_url = (base_url or GITHUB_API_URL).rstrip("/")
        if base_url:
            self._gh = Github(auth=Auth.Token(token), base_url=base_url)
        else:
            self._gh = Github(auth=Auth.Token(token))
        self._repo: Repository | None = None
        self._issues: dict[int, Issue] = {}
        self._login: str | None = None

    @property
    def repo(self) -> Repository:
        """The repository object (fetched lazily)."""
        if self._repo is None:
            self._repo = self._gh.get_repo(self.repository)
        return self._repo

    def get_authenticated_login(self) -> str:
        """Login of the identity the token acts as.

        Installation tokens cannot read /user; those act as the Actions bot.
        """
        if self._login is None:
            try:
                self._login = self._gh.get_user().login
            except GithubException as e:
                logger.debug(f"Cannot resolve token owner ({e.status}); assuming {ACTIONS_BOT_LOGIN}")
                self._login = ACTIONS_BOT_LOGIN
        return self._login

    def _issue(self, number: int) -> Issue:
        if number not in self._issues:
            self._issues[number] = self.repo.get_issue(number)
        return self._issues[number]

    def _rest_headers(self) -> dict[str, str]:
        return {
            "User-Agent": USER_AGENT,
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
        }

    # Pull requests

    def get_pull_request(self, number: int) -> PullRequest:
        """Get a pull request.

        Args:
            number: Pull request number

        Returns:
            PullRequest object
        """
        return self.repo.get_pull(number)

    def get_changed_files(self, pr: PullRequest) -> list[ChangedFile]:
        """List the PR's changed files in listing order.

        Args:
            pr: Pull request object

        Returns:
            ChangedFile snapshots; ``patch`` is None for binary or oversized files
        """
        files = []
        for file in pr.get_files():
            files.append(
                ChangedFile(
                    path=file.filename,
                    status=FileStatus.from_github(file.status or "modified"),
                    patch=file.patch,
                )
            )
        logger.debug(f"PR #{pr.number} has {len(files)} changed files")
        return files

    def get_label_names(self, pr: PullRequest) -> list[str]:
        """Names of the labels currently attached to the PR."""
        return [label.name for label in pr.labels]

    # Labels attached to an issue/PR

    def add_labels(self, number: int, names: list[str]) -> None:
        """Attach labels to an issue or PR."""
        logger.info(f"Adding labels {names} to #{number}")
        self._issue(number).add_to_labels(*names)

    def remove_label(self, number: int, name: str) -> None:
        """Detach a label from an issue or PR."""
        logger.info(f"Removing label '{name}' from #{number}")
        self._issue(number).remove_from_labels(name)

    # Repository label definitions

    def list_labels(self) -> list[LabelState]:
        """List all label definitions of the repository."""
        return [
            LabelState(name=label.name, color=label.color, description=label.description or "")
            for label in self.repo.get_labels()
        ]

    def create_label(self, label: LabelState) -> None:
        """Create a label definition."""
        logger.info(f"Creating label '{label.name}' ({label.color})")
        self.repo.create_label(name=label.name, color=label.color, description=label.description)

    def patch_label(self, label: LabelState) -> requests.Response:
        """Update a label definition's color and description in place.

        Uses the REST endpoint directly so the name is left untouched.

        Returns:
            The raw response; callers check its status
        """
        url = f"{self._api_url}/repos/{self.repository}/labels/{quote(label.name, safe='')}"
        logger.info(f"Updating label '{label.name}' to {label.color}")
        return requests.patch(
            url,
            json={"color": label.color, "description": label.description},
            headers=self._rest_headers(),
            timeout=REST_TIMEOUT_SECONDS,
        )

    # Issue comments

    def list_comments(self, number: int) -> list[IssueComment]:
        """List comments on an issue or PR."""
        return list(self._issue(number).get_comments())

    def create_comment(self, number: int, body: str) -> int:
        """Create an issue comment and return its id."""
        comment = self._issue(number).create_comment(body)
        return comment.id

    def edit_comment(self, comment: IssueComment, body: str) -> int:
        """Replace an existing comment's body and return its id."""
        comment.edit(body)
        return comment.id

    def rest_create_comment(self, number: int, body: str) -> requests.Response:
        """Create an issue comment with a direct REST call."""
        url = f"{self._api_url}/repos/{self.repository}/issues/{number}/comments"
        return requests.post(
            url, json={"body": body}, headers=self._rest_headers(), timeout=REST_TIMEOUT_SECONDS
        )

    def rest_edit_comment(self, comment_id: int, body: str) -> requests.Response:
        """Edit an issue comment with a direct REST call."""
        url = f"{self._api_url}/repos/{self.repository}/issues/comments/{comment_id}"
        return requests.patch(
            url, json={"body": body}, headers=self._rest_headers(), timeout=REST_TIMEOUT_SECONDS
        )
