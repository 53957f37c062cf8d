"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from pathlib import Path
from typing import Any, Coroutine, NoReturn, TypeVar

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from approve_label.configuration.driver import get_approval_check_config, get_base_config, get_label_command_config
from approve_label.configuration.exceptions import EventPayloadError
from approve_label.github.adapter import GitHubGraphQLAdapter
from approve_label.labels.manager import LabelManager
from approve_label.runner.actions import set_failed, set_output
from approve_label.runner.event import TriggerEvent, load_event
from approve_label.runner.workflow_runner import run_check_approval_workflow, run_label_command_workflow
from approve_label.utils.constants import DEFAULT_GITHUB_API_URL
from approve_label.utils.github import split_comma_separated, split_repository_in_configuration
from approve_label.utils.logging import configure_logging

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False, no_args_is_help=True)

T = TypeVar("T")

GitHubTokenOption = Annotated[
    str | None,
    Option("--github-token", envvar=["GH_TOKEN", "INPUT_GITHUB-TOKEN", "GITHUB_TOKEN"], help="GitHub token used for every API call."),
]
GitHubApiUrlOption = Annotated[str, Option("--github-api-url", envvar="GITHUB_API_URL", help="GitHub API URL.")]
EventPathOption = Annotated[
    Path | None,
    Option("--event-path", envvar="GITHUB_EVENT_PATH", help="Path to the JSON event payload written by the runner."),
]
DebugOption = Annotated[bool, Option("--debug", envvar=["RUNNER_DEBUG", "DEBUG"], help="Enable debug logging.")]


def fail(message: str) -> NoReturn:
    """Report a failure to the runner and exit with status 1."""
    set_failed(message)
    raise typer.Exit(1)


def run_or_fail(coroutine: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning any exception into a reported failure."""
    try:
        return asyncio.run(coroutine)
    except Exception as exc:
        logger.error("Unhandled error", error=str(exc), error_type=type(exc).__name__, exc_info=True)
        fail(str(exc))


def _load_trigger_event(event_path: Path | None) -> TriggerEvent:
    if event_path is None:
        fail("No event payload available (set GITHUB_EVENT_PATH or pass --event-path)")
    try:
        return load_event(event_path)
    except EventPayloadError as exc:
        fail(str(exc))


@typer_app.command(name="check-approval")
def check_approval_cli(
    github_token: GitHubTokenOption = None,
    organization: Annotated[
        str | None,
        Option("--organization", envvar="INPUT_ORGANIZATION", help="Organization owning the teams. Defaults to the event's organization."),
    ] = None,
    valid_approval_teams: Annotated[
        str | None,
        Option("--valid-approval-teams", envvar="INPUT_VALID-APPROVAL-TEAMS", help="Comma-separated team slugs whose members may approve."),
    ] = None,
    expected_label_name: Annotated[
        str | None,
        Option("--expected-label-name", envvar="INPUT_EXPECTED-LABEL-NAME", help="Label the triggering event must carry."),
    ] = None,
    event_path: EventPathOption = None,
    github_api_url: GitHubApiUrlOption = DEFAULT_GITHUB_API_URL,
    debug: DebugOption = False,
) -> None:
    """Check that the sender of the event belongs to an approving team and applied the expected label."""
    configure_logging(debug)
    event = _load_trigger_event(event_path)
    try:
        config = get_approval_check_config(
            event=event,
            debug=debug,
            github_api_url=github_api_url,
            github_token=github_token,
            organization=organization,
            valid_approval_teams=valid_approval_teams,
            expected_label_name=expected_label_name,
        )
    except Exception as exc:
        fail(str(exc))

    decision = run_or_fail(run_check_approval_workflow(config, event))
    if not decision.passed:
        fail(decision.failure_message or f"{decision.sender} is not a valid approver")
    typer.echo(f"{decision.sender} is a valid approver for label {decision.expected_label}")


@typer_app.command(name="label-command")
def label_command_cli(
    github_token: GitHubTokenOption = None,
    repo: Annotated[
        str | None,
        Option("--repo", envvar="GITHUB_REPOSITORY", help="Repository (owner/repo). Defaults to the event's repository."),
    ] = None,
    label_name: Annotated[
        str | None,
        Option("--label-name", envvar="INPUT_LABEL-NAME", help="Label added when the add trigger names no labels."),
    ] = None,
    label_color: Annotated[
        str | None,
        Option("--label-color", envvar="INPUT_LABEL-COLOR", help="Color of labels created by the add trigger."),
    ] = None,
    label_description: Annotated[
        str | None,
        Option("--label-description", envvar="INPUT_LABEL-DESCRIPTION", help="Description of labels created by the add trigger."),
    ] = None,
    comment_trigger_add: Annotated[
        str | None,
        Option("--comment-trigger-add", envvar="INPUT_COMMENT-TRIGGER-ADD", help="Comment phrase that adds labels."),
    ] = None,
    comment_trigger_remove: Annotated[
        str | None,
        Option("--comment-trigger-remove", envvar="INPUT_COMMENT-TRIGGER-REMOVE", help="Comment phrase that removes labels."),
    ] = None,
    comment_trigger_remove_all: Annotated[
        str | None,
        Option("--comment-trigger-remove-all", envvar="INPUT_COMMENT-TRIGGER-REMOVE-ALL", help="Comment phrase that removes every label."),
    ] = None,
    event_path: EventPathOption = None,
    github_api_url: GitHubApiUrlOption = DEFAULT_GITHUB_API_URL,
    debug: DebugOption = False,
) -> None:
    """Add or remove pull request labels as requested by an issue comment."""
    configure_logging(debug)
    event = _load_trigger_event(event_path)
    try:
        config = get_label_command_config(
            debug=debug,
            github_api_url=github_api_url,
            github_token=github_token,
            repo=repo,
            label_name=label_name,
            label_color=label_color,
            label_description=label_description,
            comment_trigger_add=comment_trigger_add,
            comment_trigger_remove=comment_trigger_remove,
            comment_trigger_remove_all=comment_trigger_remove_all,
        )
    except Exception as exc:
        fail(str(exc))

    run_or_fail(run_label_command_workflow(config, event))


# --- Typer group for direct pull request label operations ---
pr_app = typer.Typer(help="Pull request label and comment commands")


def pr_callback(
    ctx: typer.Context,
    repo: Annotated[str, Argument(help="Repository name (owner/repo).")],
    pr_number: Annotated[int, Argument(help="Pull request number.")],
    github_token: GitHubTokenOption = None,
    github_api_url: GitHubApiUrlOption = DEFAULT_GITHUB_API_URL,
    debug: DebugOption = False,
) -> None:
    """Set the pull request for the current context."""
    configure_logging(debug)
    try:
        config = get_base_config(debug=debug, github_api_url=github_api_url, github_token=github_token)
        owner, repo_name = asyncio.run(split_repository_in_configuration(repo))
    except Exception as exc:
        fail(str(exc))
    ctx.ensure_object(dict)
    ctx.obj["owner"] = owner
    ctx.obj["repo_name"] = repo_name
    ctx.obj["pr_number"] = pr_number
    ctx.obj["config"] = config


pr_app.callback()(pr_callback)


async def _create_label_manager(ctx: typer.Context) -> LabelManager:
    config = ctx.obj["config"]
    adapter = await GitHubGraphQLAdapter.create(github_token=config.github_token, github_api_url=config.github_api_url)
    return LabelManager(adapter)


@pr_app.command(name="add-label")
def add_label_cli(
    ctx: typer.Context,
    name: Annotated[str, Argument(help="Label name.")],
    color: Annotated[str | None, Option("--color", help="Label color used if the label has to be created.")] = None,
    description: Annotated[str | None, Option("--description", help="Label description used if the label has to be created.")] = None,
) -> None:
    """Add a label to the pull request, creating it in the repository when missing."""
    owner: str = ctx.obj["owner"]
    repo_name: str = ctx.obj["repo_name"]
    pr_number: int = ctx.obj["pr_number"]

    async def add_label() -> None:
        manager = await _create_label_manager(ctx)
        label = await manager.create_pr_label(owner, repo_name, pr_number, name, color, description)
        typer.echo(f"label {label.name} added to {owner}/{repo_name}#{pr_number}")

    run_or_fail(add_label())


@pr_app.command(name="remove-labels")
def remove_labels_cli(
    ctx: typer.Context,
    names: Annotated[list[str], Argument(help="Label names; each argument may itself be a comma-separated list.")],
) -> None:
    """Remove labels from the pull request, skipping names that do not exist."""
    owner: str = ctx.obj["owner"]
    repo_name: str = ctx.obj["repo_name"]
    pr_number: int = ctx.obj["pr_number"]
    label_names = [label for value in names for label in split_comma_separated(value)]

    async def remove_labels() -> None:
        manager = await _create_label_manager(ctx)
        result = await manager.remove_pr_labels(owner, repo_name, pr_number, label_names)
        typer.echo(f"labels removed: {', '.join(result.removed) or 'none'}")
        for skipped in result.skipped:
            typer.echo(f"label {skipped} not found, skipped")
        set_output("removed-labels", ",".join(result.removed))
        set_output("skipped-labels", ",".join(result.skipped))

    run_or_fail(remove_labels())


@pr_app.command(name="clear-labels")
def clear_labels_cli(ctx: typer.Context) -> None:
    """Remove every label from the pull request."""
    owner: str = ctx.obj["owner"]
    repo_name: str = ctx.obj["repo_name"]
    pr_number: int = ctx.obj["pr_number"]

    async def clear_labels() -> None:
        manager = await _create_label_manager(ctx)
        await manager.clear_pr_labels(owner, repo_name, pr_number)
        typer.echo(f"all labels removed from {owner}/{repo_name}#{pr_number}")

    run_or_fail(clear_labels())


@pr_app.command(name="comment")
def comment_cli(
    ctx: typer.Context,
    body: Annotated[str, Argument(help="Comment body (Markdown).")],
) -> None:
    """Post a comment on the pull request."""
    owner: str = ctx.obj["owner"]
    repo_name: str = ctx.obj["repo_name"]
    pr_number: int = ctx.obj["pr_number"]

    async def create_comment() -> None:
        manager = await _create_label_manager(ctx)
        comment = await manager.create_pr_comment(owner, repo_name, pr_number, body)
        typer.echo(f"comment created at {comment.created_at.isoformat()}")

    run_or_fail(create_comment())


# --- Register the pr_app as a sub-app of the main Typer app ---
typer_app.add_typer(pr_app, name="pr")


if __name__ == "__main__":
    typer_app()
