"""Contains results of label operations."""

from dataclasses import dataclass, field
from enum import Enum

from approve_label.github.models import Label


class LabelCommandKind(str, Enum):
    """Label operations that a pull request comment can request."""

    ADD = "add"
    REMOVE = "remove"
    REMOVE_ALL = "remove_all"


@dataclass
class LabelRemovalResult:
    """Labels removed from a pull request, and requested labels skipped because they do not exist."""

    removed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass
class LabelCommandResult:
    """Outcome of dispatching a comment-triggered label command."""

    kind: LabelCommandKind
    added: list[Label] = field(default_factory=list)
    removal: LabelRemovalResult | None = None
    cleared: bool = False
