"""Exceptions raised by the GitHub GraphQL adapter."""

from typing import Any


class GitHubGraphQLError(Exception):
    """Base class for errors raised while talking to the GitHub GraphQL API."""

    pass


class GraphQLTransportError(GitHubGraphQLError):
    """Raised when a GraphQL request could not be completed (network, HTTP or auth failure)."""

    pass


class GraphQLResponseError(GitHubGraphQLError):
    """Raised when the GraphQL API answers with a non-empty ``errors`` array."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        """Initializes the exception with the errors reported by the API."""
        messages = "; ".join(str(error.get("message", "unknown error")) for error in errors) or "unknown error"
        super().__init__(f"GraphQL request failed: {messages}")
        self.errors = errors

    @property
    def error_types(self) -> list[str]:
        """Return the ``type`` of every reported error that has one."""
        return [str(error["type"]) for error in self.errors if error.get("type")]

    @property
    def is_not_found(self) -> bool:
        """Return True when the API reported that a requested object does not exist."""
        return "NOT_FOUND" in self.error_types


class ResourceNotFoundError(GitHubGraphQLError):
    """Raised when a team, organization, repository, pull request or label does not exist."""

    resource = "resource"

    def __init__(self, identifier: str) -> None:
        """Initializes the exception with the identifier that could not be resolved."""
        super().__init__(f"Could not find {self.resource} '{identifier}'")
        self.identifier = identifier


class OrganizationNotFoundError(ResourceNotFoundError):
    """Raised when an organization login cannot be resolved."""

    resource = "organization"


class TeamNotFoundError(ResourceNotFoundError):
    """Raised when a team slug does not exist in an organization."""

    resource = "team"

    def __init__(self, team_slug: str, organization: str) -> None:
        """Initializes the exception with the missing team and its organization."""
        super().__init__(f"{organization}/{team_slug}")
        self.team_slug = team_slug
        self.organization = organization


class RepositoryNotFoundError(ResourceNotFoundError):
    """Raised when an owner/repository pair cannot be resolved."""

    resource = "repository"


class PullRequestNotFoundError(ResourceNotFoundError):
    """Raised when a pull request number cannot be resolved in a repository."""

    resource = "pull request"


class LabelNotFoundError(ResourceNotFoundError):
    """Raised when a label name is not among a repository's labels."""

    resource = "label"
