"""GitHub GraphQL client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit.exception import GitHubException, GraphQLFailed

from approve_label.utils.constants import DEFAULT_GITHUB_API_URL, LABEL_PREVIEW

from . import queries
from .abc import GitHubGraphQLClientBase
from .client import GitHubClient, get_github_client
from .exceptions import (
    GraphQLResponseError,
    GraphQLTransportError,
    OrganizationNotFoundError,
    PullRequestNotFoundError,
    RepositoryNotFoundError,
    TeamNotFoundError,
)
from .models import Comment, Label, TeamMember

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _graphql_error_to_dict(error: Any) -> dict[str, Any]:
    """Flatten a githubkit GraphQL error object into a plain dictionary."""
    if isinstance(error, dict):
        return error
    return {
        "message": getattr(error, "message", str(error)),
        "type": getattr(error, "type", None),
        "path": getattr(error, "path", None),
    }


def handle_graphql_failures(func: F) -> F:
    """Decorator translating githubkit exceptions into the adapter's own exception types."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except GraphQLFailed as exc:
            errors = [_graphql_error_to_dict(error) for error in (exc.response.errors or [])]
            logger.error("GitHub GraphQL request returned errors", function=func.__name__, errors=errors)
            raise GraphQLResponseError(errors) from exc
        except GitHubException as exc:
            logger.error(
                "GitHub GraphQL request failed",
                function=func.__name__,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise GraphQLTransportError(f"GitHub GraphQL request failed in {func.__name__}: {exc}") from exc

    return wrapper  # type: ignore


def _error_path_mentions(exc: GraphQLResponseError, field: str) -> bool:
    """Return True when any reported error points at the given response field."""
    return any(field in (error.get("path") or []) for error in exc.errors)


class GitHubGraphQLAdapter(GitHubGraphQLClientBase):
    """GitHub GraphQL client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, preview_client: GitHubClient | None = None) -> None:
        """Initialize the adapter with already-initialized clients.

        ``preview_client`` carries the label schema preview media type and is
        used for label mutations; it falls back to ``client`` when omitted.
        """
        self.client = client
        self.preview_client = preview_client or client

    @classmethod
    async def create(cls, github_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Self:
        """Create a new GitHub GraphQL adapter authenticated with a token.

        Args:
            github_token: Personal access token or workflow token
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubGraphQLAdapter instance

        Raises:
            RuntimeError: If the token is missing
        """
        logger.info("Creating client for GitHub instance", github_api_url=github_api_url)
        client = await get_github_client(github_token=github_token, github_api_url=github_api_url)
        preview_client = await get_github_client(github_token=github_token, github_api_url=github_api_url, previews=[LABEL_PREVIEW])
        return cls(client, preview_client)

    @handle_graphql_failures
    async def execute(self, document: str, variables: dict[str, Any] | None = None, preview: bool = False) -> dict[str, Any]:
        """Execute a GraphQL document once and return the ``data`` member of the response."""
        client = self.preview_client if preview else self.client
        data: dict[str, Any] = await client.async_graphql(document, variables)
        return data

    # Team Operations
    async def get_team_members(self, organization: str, team_slug: str) -> list[TeamMember]:
        """List the first page of members of an organization team.

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            TeamNotFoundError: If the team does not exist in the organization
        """
        try:
            data = await self.execute(queries.TEAM_MEMBERS_QUERY, {"teamSlug": team_slug, "owner": organization})
        except GraphQLResponseError as exc:
            if exc.is_not_found:
                raise OrganizationNotFoundError(organization) from exc
            raise

        org_data = data.get("organization")
        if org_data is None:
            raise OrganizationNotFoundError(organization)
        team = org_data.get("team")
        if team is None:
            raise TeamNotFoundError(team_slug, organization)

        edges = (team.get("members") or {}).get("edges") or []
        members = [TeamMember.model_validate(edge["node"]) for edge in edges if edge.get("node")]
        logger.debug("Fetched team members", organization=organization, team_slug=team_slug, member_count=len(members))
        return members

    # Identifier Resolution
    async def get_repository_id(self, owner: str, repo: str) -> str:
        """Resolve the node ID of a repository.

        Raises:
            RepositoryNotFoundError: If the repository does not exist or is not visible to the token
        """
        try:
            data = await self.execute(queries.REPOSITORY_ID_QUERY, {"owner": owner, "name": repo})
        except GraphQLResponseError as exc:
            if exc.is_not_found:
                raise RepositoryNotFoundError(f"{owner}/{repo}") from exc
            raise

        repository = data.get("repository")
        if repository is None:
            raise RepositoryNotFoundError(f"{owner}/{repo}")
        return str(repository["id"])

    async def get_pull_request_id(self, owner: str, repo: str, pull_request_number: int) -> str:
        """Resolve the node ID of a pull request.

        Raises:
            RepositoryNotFoundError: If the repository does not exist
            PullRequestNotFoundError: If the pull request does not exist in the repository
        """
        try:
            data = await self.execute(
                queries.PULL_REQUEST_ID_QUERY,
                {"owner": owner, "name": repo, "number": pull_request_number},
            )
        except GraphQLResponseError as exc:
            if exc.is_not_found:
                if _error_path_mentions(exc, "pullRequest"):
                    raise PullRequestNotFoundError(f"{owner}/{repo}#{pull_request_number}") from exc
                raise RepositoryNotFoundError(f"{owner}/{repo}") from exc
            raise

        repository = data.get("repository")
        if repository is None:
            raise RepositoryNotFoundError(f"{owner}/{repo}")
        pull_request = repository.get("pullRequest")
        if pull_request is None:
            raise PullRequestNotFoundError(f"{owner}/{repo}#{pull_request_number}")
        return str(pull_request["id"])

    # Label Operations
    async def list_labels(self, repository_id: str) -> list[Label]:
        """List the first page of labels of a repository identified by its node ID."""
        try:
            data = await self.execute(queries.REPOSITORY_LABELS_QUERY, {"repositoryId": repository_id})
        except GraphQLResponseError as exc:
            if exc.is_not_found:
                raise RepositoryNotFoundError(repository_id) from exc
            raise

        node = data.get("node")
        if node is None:
            raise RepositoryNotFoundError(repository_id)
        nodes = (node.get("labels") or {}).get("nodes") or []
        return [Label.model_validate(label) for label in nodes if label]

    async def create_label(self, repository_id: str, name: str, color: str, description: str | None = None) -> Label:
        """Create a label for a repository."""
        data = await self.execute(
            queries.CREATE_LABEL_MUTATION,
            {"repositoryId": repository_id, "name": name, "color": color, "description": description},
            preview=True,
        )
        return Label.model_validate(data["createLabel"]["label"])

    async def add_labels_to_labelable(self, labelable_id: str, label_ids: list[str]) -> None:
        """Add labels to an issue or pull request."""
        await self.execute(queries.ADD_LABELS_MUTATION, {"labelableId": labelable_id, "labelIds": label_ids}, preview=True)

    async def remove_labels_from_labelable(self, labelable_id: str, label_ids: list[str]) -> None:
        """Remove labels from an issue or pull request."""
        await self.execute(queries.REMOVE_LABELS_MUTATION, {"labelableId": labelable_id, "labelIds": label_ids}, preview=True)

    async def clear_labels_from_labelable(self, labelable_id: str) -> None:
        """Remove every label from an issue or pull request."""
        await self.execute(queries.CLEAR_LABELS_MUTATION, {"labelableId": labelable_id}, preview=True)

    # Comment Operations
    async def add_comment(self, subject_id: str, body: str) -> Comment:
        """Add a comment to an issue or pull request and return its timestamp and body."""
        data = await self.execute(queries.ADD_COMMENT_MUTATION, {"subjectId": subject_id, "body": body})
        return Comment.model_validate(data["addComment"]["commentEdge"]["node"])
