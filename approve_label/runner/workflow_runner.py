"""Orchestrates one invocation of the action for a trigger event."""

import time

import structlog
import typer

from approve_label.approval.checker import check_approval
from approve_label.approval.models import ApprovalDecision
from approve_label.configuration.exceptions import EventPayloadError
from approve_label.configuration.models import ApprovalCheckConfig, LabelCommandConfig
from approve_label.github.abc import GitHubGraphQLClientBase
from approve_label.github.adapter import GitHubGraphQLAdapter
from approve_label.labels.commands import CommentTriggers, dispatch_label_command, parse_label_command
from approve_label.labels.manager import LabelManager
from approve_label.labels.results import LabelCommandResult
from approve_label.runner.actions import set_output
from approve_label.runner.event import TriggerEvent
from approve_label.utils.github import split_repository_in_configuration

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def run_check_approval_workflow(
    config: ApprovalCheckConfig,
    event: TriggerEvent,
    adapter: GitHubGraphQLClientBase | None = None,
) -> ApprovalDecision:
    """Run the approval check for the event's sender and publish the ``approved`` step output."""
    if adapter is None:
        adapter = await GitHubGraphQLAdapter.create(github_token=config.github_token, github_api_url=config.github_api_url)

    typer.echo(f"using org {config.organization}")
    start_time = time.time()
    decision = await check_approval(
        adapter,
        event,
        organization=config.organization,
        team_slugs=config.team_slugs,
        expected_label=config.expected_label_name,
    )
    logger.info("Checked approval", duration=round(time.time() - start_time, 2), team_count=len(config.team_slugs))

    for lookup in decision.lookups:
        if lookup.message:
            typer.echo(f"{lookup.team_slug}: {lookup.message}")
    set_output("approved", "true" if decision.passed else "false")
    return decision


async def resolve_pull_request_target(config: LabelCommandConfig, event: TriggerEvent) -> tuple[str, str, int]:
    """Work out the owner, repository and pull request number a label command applies to.

    The configured repository wins over the repository of the event.

    Raises:
        EventPayloadError: If the repository or the pull request number cannot be determined.
    """
    if config.repo:
        owner, repo = await split_repository_in_configuration(config.repo)
    elif event.repository_owner and event.repository_name:
        owner, repo = event.repository_owner, event.repository_name
    else:
        raise EventPayloadError("Event payload does not identify a repository and no repository is configured")
    if event.pull_request_number is None:
        raise EventPayloadError("Event payload does not contain a pull request number")
    return owner, repo, event.pull_request_number


async def run_label_command_workflow(
    config: LabelCommandConfig,
    event: TriggerEvent,
    adapter: GitHubGraphQLClientBase | None = None,
) -> LabelCommandResult | None:
    """Apply the label command found in the event's comment, if there is one."""
    triggers = CommentTriggers(
        add=config.comment_trigger_add,
        remove=config.comment_trigger_remove,
        remove_all=config.comment_trigger_remove_all,
    )
    command = parse_label_command(event.comment_body, triggers)
    if command is None:
        typer.echo("Comment does not contain a label command, skipping")
        return None

    owner, repo, pr_number = await resolve_pull_request_target(config, event)
    if adapter is None:
        adapter = await GitHubGraphQLAdapter.create(github_token=config.github_token, github_api_url=config.github_api_url)

    result = await dispatch_label_command(
        LabelManager(adapter),
        command,
        owner,
        repo,
        pr_number,
        default_label=config.label_name,
        color=config.label_color,
        description=config.label_description,
    )

    if result.added:
        typer.echo(f"labels added: {', '.join(label.name for label in result.added)}")
    if result.removal is not None:
        typer.echo(f"labels removed: {', '.join(result.removal.removed) or 'none'}")
        for name in result.removal.skipped:
            typer.echo(f"label {name} not found, skipped")
        set_output("removed-labels", ",".join(result.removal.removed))
        set_output("skipped-labels", ",".join(result.removal.skipped))
    if result.cleared:
        typer.echo(f"all labels removed from {owner}/{repo}#{pr_number}")
    return result
