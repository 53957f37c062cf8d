"""Workflow commands and step outputs understood by the GitHub Actions runner."""

import uuid
from pathlib import Path

import structlog
import typer

from approve_label.configuration.env import get_settings

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def escape_data(value: str) -> str:
    """Escape a workflow command message so it stays on a single line."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str) -> None:
    """Report a failure to the runner as an error annotation."""
    typer.echo(f"::error::{escape_data(message)}")


def set_output(name: str, value: str, output_path: Path | None = None) -> None:
    """Append a step output to the runner's GITHUB_OUTPUT file.

    Multi-line values are written with a random heredoc delimiter. Nothing is
    written when the runner did not provide an output file.
    """
    path = output_path or get_settings().GITHUB_OUTPUT
    if path is None:
        logger.debug("No GITHUB_OUTPUT file, skipping step output", name=name)
        return
    with open(path, "a", encoding="utf-8") as f:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")
    logger.debug("Wrote step output", name=name, value=value)
