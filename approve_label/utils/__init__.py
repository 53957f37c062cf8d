"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_COMMENT_TRIGGER_ADD,
    DEFAULT_COMMENT_TRIGGER_REMOVE,
    DEFAULT_COMMENT_TRIGGER_REMOVE_ALL,
    DEFAULT_EXPECTED_LABEL_NAME,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_LABEL_COLOR,
)
from .github import normalize_team_slug, split_comma_separated

__all__ = [
    "DEFAULT_COMMENT_TRIGGER_ADD",
    "DEFAULT_COMMENT_TRIGGER_REMOVE",
    "DEFAULT_COMMENT_TRIGGER_REMOVE_ALL",
    "DEFAULT_EXPECTED_LABEL_NAME",
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_LABEL_COLOR",
    "normalize_team_slug",
    "split_comma_separated",
]
