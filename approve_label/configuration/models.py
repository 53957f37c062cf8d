"""Reconciled configuration for each command."""

from dataclasses import dataclass


@dataclass
class BaseConfig:
    """Configuration shared by every command."""

    debug: bool
    github_api_url: str
    github_token: str


@dataclass
class ApprovalCheckConfig(BaseConfig):
    """Configuration class for the check-approval command."""

    organization: str
    team_slugs: list[str]
    expected_label_name: str


@dataclass
class LabelCommandConfig(BaseConfig):
    """Configuration class for the label-command command."""

    repo: str | None
    label_name: str | None
    label_color: str
    label_description: str
    comment_trigger_add: str
    comment_trigger_remove: str
    comment_trigger_remove_all: str
