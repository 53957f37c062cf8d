"""Shared constants used across the application."""

# GitHub API Constants
# --------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub API URL (override for GitHub Enterprise Server)."""

LABEL_PREVIEW = "bane"
"""GraphQL schema preview required by the label mutations."""

MAX_TEAM_MEMBERS = 50
"""Number of team members fetched in the single page of a team lookup."""

MAX_REPOSITORY_LABELS = 50
"""Number of repository labels scanned when looking a label up by name."""

# Label Constants
# ---------------

DEFAULT_LABEL_COLOR = "FBCA04"
"""Color given to labels created without an explicit color."""

DEFAULT_LABEL_DESCRIPTION = ""
"""Description given to labels created without an explicit description."""

# Approval Constants
# ------------------

DEFAULT_EXPECTED_LABEL_NAME = "Label Action"
"""Label the triggering event must carry for an approval to pass."""

# Comment Trigger Constants
# -------------------------

DEFAULT_COMMENT_TRIGGER_ADD = "add labels"
"""Comment phrase that adds the listed labels to the pull request."""

DEFAULT_COMMENT_TRIGGER_REMOVE = "remove labels"
"""Comment phrase that removes the listed labels from the pull request."""

DEFAULT_COMMENT_TRIGGER_REMOVE_ALL = "remove all labels"
"""Comment phrase that clears every label from the pull request."""
