"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pr_reviewer.config import Config, GitHubConfig, ModelConfig, ReviewSettings
from pr_reviewer.models.files import ChangedFile, FileStatus
from pr_reviewer.models.labels import LabelState

SAMPLE_TODO_PATCH = """\
@@ -1,3 +1,5 @@
 def handler(event):
+    # TODO: validate payload
+    result = process(event)
     return result
"""

SAMPLE_PRINT_PATCH = """\
@@ -10,2 +10,4 @@ def process(items):
     total = sum(items)
+    print("total", total)
+    return total
"""

SAMPLE_CLEAN_PATCH = """\
@@ -1,2 +1,3 @@
 import logging
+logger = logging.getLogger(__name__)
"""


def make_patch(added_lines: int, text: str = "value = 1") -> str:
    """Build a patch with exactly ``added_lines`` lines starting with '+'."""
    body = "\n".join(f"+{text}" for _ in range(added_lines))
    return f"@@ -0,0 +1,{added_lines} @@\n{body}"


class FakeGitHub:
    """In-memory stand-in for GitHubClient's label and comment operations."""

    def __init__(
        self,
        attached: list[str] | None = None,
        definitions: list[LabelState] | None = None,
        files: list[ChangedFile] | None = None,
    ) -> None:
        self.attached = list(attached or [])
        self.definitions = list(definitions or [])
        self.files = list(files or [])
        self.calls: list[tuple] = []
        self.comments: list[MagicMock] = []
        self.patch_status = 200
        self.login = "github-actions[bot]"

    # PR data
    def get_pull_request(self, number):
        pr = MagicMock()
        pr.number = number
        return pr

    def get_changed_files(self, pr):
        return list(self.files)

    def get_label_names(self, pr):
        return list(self.attached)

    # Attached labels
    def add_labels(self, number, names):
        self.calls.append(("add", number, tuple(names)))
        self.attached.extend(names)

    def remove_label(self, number, name):
        self.calls.append(("remove", number, name))
        self.attached.remove(name)

    # Definitions
    def list_labels(self):
        return list(self.definitions)

    def create_label(self, label):
        self.calls.append(("create", label.name))
        self.definitions.append(label)

    def patch_label(self, label):
        self.calls.append(("patch", label.name))
        response = MagicMock()
        response.status_code = self.patch_status
        response.ok = self.patch_status < 400
        response.text = "" if response.ok else "Validation Failed"
        if response.ok:
            self.definitions = [d for d in self.definitions if d.name.lower() != label.name.lower()]
            self.definitions.append(label)
        return response

    # Comments
    def get_authenticated_login(self):
        return self.login

    def list_comments(self, number):
        return list(self.comments)

    def create_comment(self, number, body):
        self.calls.append(("comment", number))
        comment = MagicMock(
            id=1000 + len(self.comments), body=body, user=MagicMock(login=self.login)
        )
        self.comments.append(comment)
        return comment.id

    def edit_comment(self, comment, body):
        self.calls.append(("edit_comment", comment.id))
        comment.body = body
        return comment.id

    def label_calls(self):
        return [c for c in self.calls if c[0] in {"add", "remove"}]


@pytest.fixture
def fake_github() -> FakeGitHub:
    """An empty in-memory GitHub."""
    return FakeGitHub()


@pytest.fixture
def todo_file() -> ChangedFile:
    return ChangedFile(path="app/handler.py", status=FileStatus.MODIFIED, patch=SAMPLE_TODO_PATCH)


@pytest.fixture
def print_file() -> ChangedFile:
    return ChangedFile(path="app/process.py", status=FileStatus.ADDED, patch=SAMPLE_PRINT_PATCH)


@pytest.fixture
def clean_file() -> ChangedFile:
    return ChangedFile(path="app/log.py", status=FileStatus.MODIFIED, patch=SAMPLE_CLEAN_PATCH)


@pytest.fixture
def binary_file() -> ChangedFile:
    return ChangedFile(path="assets/logo.png", status=FileStatus.ADDED, patch=None)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """A valid configuration pointing at a temporary prompt path."""
    return Config(
        github=GitHubConfig(
            token="gh-token",
            repository="test-org/test-repo",
            event_path=str(tmp_path / "event.json"),
        ),
        model=ModelConfig(token="ai-token", endpoint="https://models.example.test/inference"),
        review=ReviewSettings(prompt_path=str(tmp_path / "review-prompt.md")),
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration environment variables."""
    for name in (
        "GITHUB_TOKEN",
        "GITHUB_EVENT_PATH",
        "GITHUB_REPOSITORY",
        "MODEL_NAME",
        "MODEL_ENDPOINT",
        "AI_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
