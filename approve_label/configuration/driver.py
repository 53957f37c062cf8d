"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio

from approve_label.configuration import reconcile
from approve_label.configuration.models import (
    ApprovalCheckConfig,
    BaseConfig,
    LabelCommandConfig,
)
from approve_label.runner.event import TriggerEvent


def get_base_config(
    debug: bool = False,
    github_api_url: str | None = None,
    github_token: str | None = None,
) -> BaseConfig:
    """Synchronously get the reconciled configuration shared by every command."""
    return asyncio.run(
        reconcile.reconcile_base_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_token=github_token,
        )
    )


def get_approval_check_config(
    event: TriggerEvent,
    debug: bool = False,
    github_api_url: str | None = None,
    github_token: str | None = None,
    organization: str | None = None,
    valid_approval_teams: str | None = None,
    expected_label_name: str | None = None,
) -> ApprovalCheckConfig:
    """Synchronously get the reconciled check-approval configuration."""
    return asyncio.run(
        reconcile.reconcile_approval_check_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_token=github_token,
            cli_organization=organization,
            cli_valid_approval_teams=valid_approval_teams,
            cli_expected_label_name=expected_label_name,
            event=event,
        )
    )


def get_label_command_config(
    debug: bool = False,
    github_api_url: str | None = None,
    github_token: str | None = None,
    repo: str | None = None,
    label_name: str | None = None,
    label_color: str | None = None,
    label_description: str | None = None,
    comment_trigger_add: str | None = None,
    comment_trigger_remove: str | None = None,
    comment_trigger_remove_all: str | None = None,
) -> LabelCommandConfig:
    """Synchronously get the reconciled label-command configuration."""
    return asyncio.run(
        reconcile.reconcile_label_command_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_token=github_token,
            cli_repo=repo,
            cli_label_name=label_name,
            cli_label_color=label_color,
            cli_label_description=label_description,
            cli_comment_trigger_add=comment_trigger_add,
            cli_comment_trigger_remove=comment_trigger_remove,
            cli_comment_trigger_remove_all=comment_trigger_remove_all,
        )
    )
