"""Contains utility functions for GitHub interactions."""

import re

_SLUG_SEPARATORS = re.compile(r"[\s/\\]+")
_REPEATED_HYPHENS = re.compile(r"-{2,}")


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("A repository is required in 'owner/repo' format.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def normalize_team_slug(team: str) -> str:
    """Normalize a configured team name into a GitHub team slug.

    Team slugs are lowercase with spaces and path separators replaced by
    hyphens, so "Platform Team" and "platform/team" both become
    "platform-team". Normalizing an already-normalized slug returns it unchanged.
    """
    slug = _SLUG_SEPARATORS.sub("-", team.strip().lower())
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug.strip("-")


def split_comma_separated(value: str | None) -> list[str]:
    """Split a comma-separated input into trimmed, non-empty entries."""
    if not value:
        return []
    return [entry.strip() for entry in value.split(",") if entry.strip()]
