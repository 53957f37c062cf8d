"""Reconciles command line options, action inputs and the trigger event into configuration."""

import structlog

from approve_label.approval.checker import parse_team_slugs
from approve_label.configuration.exceptions import RequiredConfigurationElementError
from approve_label.configuration.models import ApprovalCheckConfig, BaseConfig, LabelCommandConfig
from approve_label.runner.event import TriggerEvent
from approve_label.utils.constants import (
    DEFAULT_COMMENT_TRIGGER_ADD,
    DEFAULT_COMMENT_TRIGGER_REMOVE,
    DEFAULT_COMMENT_TRIGGER_REMOVE_ALL,
    DEFAULT_EXPECTED_LABEL_NAME,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_LABEL_COLOR,
    DEFAULT_LABEL_DESCRIPTION,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def _blank_to_none(value: str | None) -> str | None:
    """Treat empty or whitespace-only inputs as not provided, like the runner does."""
    if value is None:
        return None
    value = value.strip()
    return value or None


async def reconcile_base_configuration(
    cli_debug: bool,
    cli_github_api_url: str | None,
    cli_github_token: str | None,
) -> BaseConfig:
    """Reconcile the configuration shared by every command.

    Raises:
        RequiredConfigurationElementError: If no GitHub token is provided.
    """
    github_token = _blank_to_none(cli_github_token)
    if github_token is None:
        raise RequiredConfigurationElementError(
            name="GitHub token",
            cli_name="--github-token",
            env_name="GH_TOKEN or INPUT_GITHUB-TOKEN",
        )
    return BaseConfig(
        debug=cli_debug,
        github_api_url=_blank_to_none(cli_github_api_url) or DEFAULT_GITHUB_API_URL,
        github_token=github_token,
    )


async def reconcile_approval_check_configuration(
    cli_debug: bool,
    cli_github_api_url: str | None,
    cli_github_token: str | None,
    cli_organization: str | None,
    cli_valid_approval_teams: str | None,
    cli_expected_label_name: str | None,
    event: TriggerEvent,
) -> ApprovalCheckConfig:
    """Reconcile the check-approval configuration.

    The organization falls back to the organization of the trigger event.

    Raises:
        RequiredConfigurationElementError: If the token, the organization or the team list is missing.
    """
    base = await reconcile_base_configuration(cli_debug, cli_github_api_url, cli_github_token)

    organization = _blank_to_none(cli_organization) or event.organization_login
    if not organization:
        raise RequiredConfigurationElementError(
            name="organization",
            cli_name="--organization",
            env_name="INPUT_ORGANIZATION",
        )

    if _blank_to_none(cli_valid_approval_teams) is None:
        raise RequiredConfigurationElementError(
            name="valid approval teams",
            cli_name="--valid-approval-teams",
            env_name="INPUT_VALID-APPROVAL-TEAMS",
        )
    team_slugs = parse_team_slugs(cli_valid_approval_teams)

    config = ApprovalCheckConfig(
        debug=base.debug,
        github_api_url=base.github_api_url,
        github_token=base.github_token,
        organization=organization,
        team_slugs=team_slugs,
        expected_label_name=_blank_to_none(cli_expected_label_name) or DEFAULT_EXPECTED_LABEL_NAME,
    )
    logger.debug(
        "Reconciled approval check configuration",
        organization=config.organization,
        team_slugs=config.team_slugs,
        expected_label_name=config.expected_label_name,
    )
    return config


async def reconcile_label_command_configuration(
    cli_debug: bool,
    cli_github_api_url: str | None,
    cli_github_token: str | None,
    cli_repo: str | None,
    cli_label_name: str | None,
    cli_label_color: str | None,
    cli_label_description: str | None,
    cli_comment_trigger_add: str | None,
    cli_comment_trigger_remove: str | None,
    cli_comment_trigger_remove_all: str | None,
) -> LabelCommandConfig:
    """Reconcile the label-command configuration, applying the default label color and trigger phrases."""
    base = await reconcile_base_configuration(cli_debug, cli_github_api_url, cli_github_token)
    return LabelCommandConfig(
        debug=base.debug,
        github_api_url=base.github_api_url,
        github_token=base.github_token,
        repo=_blank_to_none(cli_repo),
        label_name=_blank_to_none(cli_label_name),
        label_color=_blank_to_none(cli_label_color) or DEFAULT_LABEL_COLOR,
        label_description=_blank_to_none(cli_label_description) or DEFAULT_LABEL_DESCRIPTION,
        comment_trigger_add=_blank_to_none(cli_comment_trigger_add) or DEFAULT_COMMENT_TRIGGER_ADD,
        comment_trigger_remove=_blank_to_none(cli_comment_trigger_remove) or DEFAULT_COMMENT_TRIGGER_REMOVE,
        comment_trigger_remove_all=_blank_to_none(cli_comment_trigger_remove_all) or DEFAULT_COMMENT_TRIGGER_REMOVE_ALL,
    )
