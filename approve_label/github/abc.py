"""Base ABC for GitHub GraphQL clients."""

from abc import ABC, abstractmethod
from typing import Any

from .models import Comment, Label, TeamMember


class GitHubGraphQLClientBase(ABC):
    """Base ABC for GitHub GraphQL clients."""

    @abstractmethod
    async def execute(self, document: str, variables: dict[str, Any] | None = None, preview: bool = False) -> dict[str, Any]:
        """Execute a GraphQL query or mutation and return its ``data``."""
        pass

    # Team Operations
    @abstractmethod
    async def get_team_members(self, organization: str, team_slug: str) -> list[TeamMember]:
        """List the members of an organization team."""
        pass

    # Identifier Resolution
    @abstractmethod
    async def get_repository_id(self, owner: str, repo: str) -> str:
        """Resolve the node ID of a repository."""
        pass

    @abstractmethod
    async def get_pull_request_id(self, owner: str, repo: str, pull_request_number: int) -> str:
        """Resolve the node ID of a pull request."""
        pass

    # Label Operations
    @abstractmethod
    async def list_labels(self, repository_id: str) -> list[Label]:
        """List labels for a repository."""
        pass

    @abstractmethod
    async def create_label(self, repository_id: str, name: str, color: str, description: str | None = None) -> Label:
        """Create a label for a repository."""
        pass

    @abstractmethod
    async def add_labels_to_labelable(self, labelable_id: str, label_ids: list[str]) -> None:
        """Add labels to an issue or pull request."""
        pass

    @abstractmethod
    async def remove_labels_from_labelable(self, labelable_id: str, label_ids: list[str]) -> None:
        """Remove labels from an issue or pull request."""
        pass

    @abstractmethod
    async def clear_labels_from_labelable(self, labelable_id: str) -> None:
        """Remove every label from an issue or pull request."""
        pass

    # Comment Operations
    @abstractmethod
    async def add_comment(self, subject_id: str, body: str) -> Comment:
        """Add a comment to an issue or pull request."""
        pass
