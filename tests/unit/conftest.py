"""Fixtures for unit tests."""

from datetime import datetime, timezone
from typing import Any, Generator

import pytest
import structlog

from approve_label.github.abc import GitHubGraphQLClientBase
from approve_label.github.exceptions import (
    PullRequestNotFoundError,
    RepositoryNotFoundError,
    TeamNotFoundError,
)
from approve_label.github.models import Comment, Label, TeamMember
from approve_label.runner.event import TriggerEvent


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def isolate_runner_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's or CI runner's environment out of the tests."""
    for name in (
        "GITHUB_OUTPUT",
        "GITHUB_EVENT_PATH",
        "GITHUB_REPOSITORY",
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "INPUT_GITHUB-TOKEN",
        "INPUT_ORGANIZATION",
        "INPUT_VALID-APPROVAL-TEAMS",
        "INPUT_EXPECTED-LABEL-NAME",
        "RUNNER_DEBUG",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


class FakeGitHubAdapter(GitHubGraphQLClientBase):
    """In-memory stand-in for the GitHub GraphQL API.

    Holds one organization with teams, and repositories with labels and pull
    requests, and records every call so tests can assert on API traffic.
    """

    def __init__(self) -> None:
        self.teams: dict[str, list[TeamMember]] = {}
        self.team_errors: dict[str, Exception] = {}
        self.repositories: dict[str, str] = {"octo-org/widgets": "R_widgets"}
        self.pull_requests: dict[tuple[str, int], str] = {("octo-org/widgets", 7): "PR_7"}
        self.labels: dict[str, list[Label]] = {"R_widgets": []}
        self.subject_labels: dict[str, list[str]] = {}
        self.comments: list[tuple[str, str]] = []
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[Any, ...]] = []

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.errors:
            raise self.errors[operation]

    async def execute(self, document: str, variables: dict[str, Any] | None = None, preview: bool = False) -> dict[str, Any]:
        raise NotImplementedError

    async def get_team_members(self, organization: str, team_slug: str) -> list[TeamMember]:
        self.calls.append(("get_team_members", organization, team_slug))
        if team_slug in self.team_errors:
            raise self.team_errors[team_slug]
        if team_slug not in self.teams:
            raise TeamNotFoundError(team_slug, organization)
        return self.teams[team_slug]

    async def get_repository_id(self, owner: str, repo: str) -> str:
        self.calls.append(("get_repository_id", owner, repo))
        self._maybe_fail("get_repository_id")
        try:
            return self.repositories[f"{owner}/{repo}"]
        except KeyError:
            raise RepositoryNotFoundError(f"{owner}/{repo}") from None

    async def get_pull_request_id(self, owner: str, repo: str, pull_request_number: int) -> str:
        self.calls.append(("get_pull_request_id", owner, repo, pull_request_number))
        self._maybe_fail("get_pull_request_id")
        if f"{owner}/{repo}" not in self.repositories:
            raise RepositoryNotFoundError(f"{owner}/{repo}")
        try:
            return self.pull_requests[(f"{owner}/{repo}", pull_request_number)]
        except KeyError:
            raise PullRequestNotFoundError(f"{owner}/{repo}#{pull_request_number}") from None

    async def list_labels(self, repository_id: str) -> list[Label]:
        self.calls.append(("list_labels", repository_id))
        self._maybe_fail("list_labels")
        return list(self.labels[repository_id])

    async def create_label(self, repository_id: str, name: str, color: str, description: str | None = None) -> Label:
        self.calls.append(("create_label", repository_id, name, color, description))
        self._maybe_fail("create_label")
        label = Label(id=f"L_{name}", name=name, color=color, description=description)
        self.labels[repository_id].append(label)
        return label

    async def add_labels_to_labelable(self, labelable_id: str, label_ids: list[str]) -> None:
        self.calls.append(("add_labels_to_labelable", labelable_id, label_ids))
        self._maybe_fail("add_labels_to_labelable")
        attached = self.subject_labels.setdefault(labelable_id, [])
        attached.extend(label_id for label_id in label_ids if label_id not in attached)

    async def remove_labels_from_labelable(self, labelable_id: str, label_ids: list[str]) -> None:
        self.calls.append(("remove_labels_from_labelable", labelable_id, label_ids))
        self._maybe_fail("remove_labels_from_labelable")
        attached = self.subject_labels.setdefault(labelable_id, [])
        self.subject_labels[labelable_id] = [label_id for label_id in attached if label_id not in label_ids]

    async def clear_labels_from_labelable(self, labelable_id: str) -> None:
        self.calls.append(("clear_labels_from_labelable", labelable_id))
        self._maybe_fail("clear_labels_from_labelable")
        self.subject_labels[labelable_id] = []

    async def add_comment(self, subject_id: str, body: str) -> Comment:
        self.calls.append(("add_comment", subject_id, body))
        self._maybe_fail("add_comment")
        self.comments.append((subject_id, body))
        return Comment(created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc), body=body)

    def calls_to(self, operation: str) -> list[tuple[Any, ...]]:
        """Return the recorded calls of one adapter operation."""
        return [call for call in self.calls if call[0] == operation]


@pytest.fixture
def fake_adapter() -> FakeGitHubAdapter:
    """An empty in-memory GitHub with the octo-org/widgets repository and pull request #7."""
    return FakeGitHubAdapter()


@pytest.fixture
def labeled_event() -> TriggerEvent:
    """A pull_request labeled event sent by alice with the default expected label."""
    return TriggerEvent(
        sender_login="alice",
        organization_login="octo-org",
        label_name="Label Action",
        action="labeled",
        pull_request_number=7,
        repository_owner="octo-org",
        repository_name="widgets",
    )
