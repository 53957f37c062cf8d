"""Label and comment operations on pull requests through the GitHub GraphQL API."""

import re

import structlog

from approve_label.github.abc import GitHubGraphQLClientBase
from approve_label.github.exceptions import GitHubGraphQLError, LabelNotFoundError
from approve_label.github.models import Comment, Label
from approve_label.utils.constants import DEFAULT_LABEL_COLOR, DEFAULT_LABEL_DESCRIPTION

from .results import LabelRemovalResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")


class LabelOperationError(Exception):
    """Raised when a composite label operation fails at one of its stages."""

    def __init__(self, stage: str, error: Exception) -> None:
        """Initializes the exception with the failing stage and its underlying error."""
        super().__init__(f"Failed to {stage}: {error}")
        self.stage = stage
        self.error = error


def normalize_label_color(color: str | None) -> str:
    """Return a six-digit hex color without a leading '#', defaulting to FBCA04."""
    if not color:
        return DEFAULT_LABEL_COLOR
    normalized = color.strip().lstrip("#")
    if not _HEX_COLOR.match(normalized):
        raise ValueError(f"Label color must be six hexadecimal digits, got '{color}'")
    return normalized.upper()


class LabelManager:
    """Creates, attaches and removes pull request labels and posts pull request comments."""

    def __init__(self, adapter: GitHubGraphQLClientBase) -> None:
        """Initialize the manager with an authenticated GraphQL adapter."""
        self.adapter = adapter

    # Identifier Resolution
    async def resolve_repository_id(self, owner: str, repo: str) -> str:
        """Resolve a repository's node ID, raising RepositoryNotFoundError when it does not exist."""
        return await self.adapter.get_repository_id(owner, repo)

    async def resolve_pull_request_id(self, owner: str, repo: str, pr_number: int) -> str:
        """Resolve a pull request's node ID, raising PullRequestNotFoundError when it does not exist."""
        return await self.adapter.get_pull_request_id(owner, repo, pr_number)

    async def find_label(self, repository_id: str, label_name: str) -> Label:
        """Find a label by name among the repository's first page of labels.

        Label names are compared case-insensitively, the way GitHub enforces
        their uniqueness.

        Raises:
            LabelNotFoundError: If no label with that name exists
        """
        labels = await self.adapter.list_labels(repository_id)
        logger.debug("Fetched repository labels", repository_id=repository_id, label_names=[label.name for label in labels])
        wanted = label_name.casefold()
        for label in labels:
            if label.name.casefold() == wanted:
                return label
        raise LabelNotFoundError(label_name)

    async def find_label_id(self, repository_id: str, label_name: str) -> str:
        """Find a label's node ID by name, raising LabelNotFoundError when it does not exist."""
        label = await self.find_label(repository_id, label_name)
        return label.id

    # Label CRUD
    async def create_label(
        self,
        repository_id: str,
        name: str,
        color: str | None = None,
        description: str | None = None,
    ) -> Label:
        """Create a label in a repository, defaulting to color FBCA04 and an empty description."""
        label = await self.adapter.create_label(
            repository_id,
            name,
            normalize_label_color(color),
            description if description is not None else DEFAULT_LABEL_DESCRIPTION,
        )
        logger.info("Created label", repository_id=repository_id, label_name=label.name, color=label.color)
        return label

    async def add_label_to_subject(self, subject_id: str, label_id: str) -> None:
        """Attach a label to an issue or pull request."""
        await self.adapter.add_labels_to_labelable(subject_id, [label_id])

    async def remove_labels_from_subject(self, subject_id: str, label_ids: list[str]) -> None:
        """Detach labels from an issue or pull request."""
        await self.adapter.remove_labels_from_labelable(subject_id, label_ids)

    async def clear_all_labels(self, subject_id: str) -> None:
        """Detach every label from an issue or pull request."""
        await self.adapter.clear_labels_from_labelable(subject_id)

    # Pull Request Operations
    async def create_pr_label(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        name: str,
        color: str | None = None,
        description: str | None = None,
    ) -> Label:
        """Attach a label to a pull request, creating the label first if the repository lacks it.

        Raises:
            LabelOperationError: If any stage fails; ``stage`` names the failing step
        """
        try:
            repository_id = await self.resolve_repository_id(owner, repo)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("resolve repository", exc) from exc
        try:
            pull_request_id = await self.resolve_pull_request_id(owner, repo, pr_number)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("resolve pull request", exc) from exc

        try:
            label = await self.find_label(repository_id, name)
            logger.info("Found existing label", label_name=label.name, label_id=label.id)
        except LabelNotFoundError:
            logger.info("Label not found in repository, creating it", label_name=name, owner=owner, repo=repo)
            try:
                label = await self.create_label(repository_id, name, color, description)
            except GitHubGraphQLError as exc:
                raise LabelOperationError("create label", exc) from exc
        except GitHubGraphQLError as exc:
            raise LabelOperationError("find label", exc) from exc

        try:
            await self.add_label_to_subject(pull_request_id, label.id)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("add label", exc) from exc
        logger.info("Added label to pull request", label_name=name, owner=owner, repo=repo, pr_number=pr_number)
        return label

    async def remove_pr_labels(self, owner: str, repo: str, pr_number: int, names: list[str]) -> LabelRemovalResult:
        """Remove the named labels from a pull request.

        Names that do not exist in the repository are skipped rather than
        failing the removal; the result reports both lists.
        """
        try:
            repository_id = await self.resolve_repository_id(owner, repo)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("resolve repository", exc) from exc
        try:
            pull_request_id = await self.resolve_pull_request_id(owner, repo, pr_number)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("resolve pull request", exc) from exc

        try:
            labels = await self.adapter.list_labels(repository_id)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("find label", exc) from exc
        labels_by_name = {label.name.casefold(): label for label in labels}

        result = LabelRemovalResult()
        label_ids: list[str] = []
        seen: set[str] = set()
        for name in names:
            # Names differing only in case refer to the same label.
            if name.casefold() in seen:
                continue
            seen.add(name.casefold())
            label = labels_by_name.get(name.casefold())
            if label is None:
                logger.info("Label not found in repository, skipping", label_name=name, owner=owner, repo=repo)
                result.skipped.append(name)
                continue
            label_ids.append(label.id)
            result.removed.append(name)

        if label_ids:
            try:
                await self.remove_labels_from_subject(pull_request_id, label_ids)
            except GitHubGraphQLError as exc:
                raise LabelOperationError("remove labels", exc) from exc
        logger.info("Removed labels from pull request", removed=result.removed, skipped=result.skipped, pr_number=pr_number)
        return result

    async def clear_pr_labels(self, owner: str, repo: str, pr_number: int) -> None:
        """Remove every label from a pull request."""
        try:
            pull_request_id = await self.resolve_pull_request_id(owner, repo, pr_number)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("resolve pull request", exc) from exc
        try:
            await self.clear_all_labels(pull_request_id)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("clear labels", exc) from exc
        logger.info("Cleared labels from pull request", owner=owner, repo=repo, pr_number=pr_number)

    async def create_pr_comment(self, owner: str, repo: str, pr_number: int, body: str) -> Comment:
        """Post a comment on a pull request and return its timestamp and body."""
        try:
            pull_request_id = await self.resolve_pull_request_id(owner, repo, pr_number)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("resolve pull request", exc) from exc
        try:
            comment = await self.adapter.add_comment(pull_request_id, body)
        except GitHubGraphQLError as exc:
            raise LabelOperationError("add comment", exc) from exc
        logger.info("Created pull request comment", owner=owner, repo=repo, pr_number=pr_number, created_at=str(comment.created_at))
        return comment
