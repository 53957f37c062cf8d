# This file is intended to hold the setup for the authenticated githubkit client.

"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from approve_label.utils.constants import DEFAULT_GITHUB_API_URL

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


async def get_github_client(
    github_token: str,
    github_api_url: str = DEFAULT_GITHUB_API_URL,
    previews: list[str] | None = None,
) -> GitHubClient:
    """Returns a GitHub client authenticated with a bearer token.

    Supports custom base URL for GitHub Enterprise Server (GHES). ``previews``
    adds schema preview media types to the Accept header of every request.
    Raises RuntimeError if no token is provided.
    """
    if not github_token:
        raise RuntimeError("GitHub token authentication requires github_token in config.")
    # Disable HTTP caching to always get fresh data, and retries so that every
    # call is a single attempt.
    return GitHub(
        auth=TokenAuthStrategy(github_token),
        base_url=github_api_url,
        previews=previews,
        http_cache=False,
        auto_retry=False,
    )
