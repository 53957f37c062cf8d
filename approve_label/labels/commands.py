"""Parses label commands from pull request comments and dispatches them to the label manager."""

import re
from dataclasses import dataclass

import structlog

from approve_label.utils.constants import (
    DEFAULT_COMMENT_TRIGGER_ADD,
    DEFAULT_COMMENT_TRIGGER_REMOVE,
    DEFAULT_COMMENT_TRIGGER_REMOVE_ALL,
)
from approve_label.utils.github import split_comma_separated

from .manager import LabelManager
from .results import LabelCommandKind, LabelCommandResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CommentTriggers:
    """Comment phrases that request each label operation."""

    add: str = DEFAULT_COMMENT_TRIGGER_ADD
    remove: str = DEFAULT_COMMENT_TRIGGER_REMOVE
    remove_all: str = DEFAULT_COMMENT_TRIGGER_REMOVE_ALL


@dataclass(frozen=True)
class LabelCommand:
    """A label operation requested by a comment, with the label names that followed the trigger phrase."""

    kind: LabelCommandKind
    label_names: list[str]


def parse_label_command(body: str | None, triggers: CommentTriggers) -> LabelCommand | None:
    """Match a comment body against the trigger phrases.

    The body must start with a trigger phrase, compared case-insensitively,
    followed by the end of the comment, whitespace or a colon. Longer phrases
    are tried first so "remove all labels" is not read as "remove labels".
    Whatever follows the phrase is a single label name or a comma-separated
    list of names.
    """
    if not body:
        return None
    text = body.strip()
    candidates = [
        (triggers.add.strip(), LabelCommandKind.ADD),
        (triggers.remove.strip(), LabelCommandKind.REMOVE),
        (triggers.remove_all.strip(), LabelCommandKind.REMOVE_ALL),
    ]
    candidates.sort(key=lambda candidate: len(candidate[0]), reverse=True)
    for phrase, kind in candidates:
        if not phrase:
            continue
        match = re.match(rf"{re.escape(phrase)}(?=$|[\s:])", text, re.IGNORECASE)
        if match:
            remainder = text[match.end() :].strip().removeprefix(":")
            return LabelCommand(kind=kind, label_names=split_comma_separated(remainder))
    return None


async def dispatch_label_command(
    manager: LabelManager,
    command: LabelCommand,
    owner: str,
    repo: str,
    pr_number: int,
    default_label: str | None = None,
    color: str | None = None,
    description: str | None = None,
) -> LabelCommandResult:
    """Run a parsed label command against a pull request.

    An add command without label names falls back to ``default_label``.
    """
    logger.info("Dispatching label command", kind=command.kind.value, label_names=command.label_names, pr_number=pr_number)
    if command.kind is LabelCommandKind.ADD:
        names = command.label_names or ([default_label] if default_label else [])
        if not names:
            raise ValueError("No label names given after the add trigger and no default label name is configured")
        result = LabelCommandResult(kind=command.kind)
        for name in names:
            result.added.append(await manager.create_pr_label(owner, repo, pr_number, name, color, description))
        return result

    if command.kind is LabelCommandKind.REMOVE:
        removal = await manager.remove_pr_labels(owner, repo, pr_number, command.label_names)
        return LabelCommandResult(kind=command.kind, removal=removal)

    await manager.clear_pr_labels(owner, repo, pr_number)
    return LabelCommandResult(kind=command.kind, cleared=True)
