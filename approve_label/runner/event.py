"""Trigger event delivered by the workflow runner."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from approve_label.configuration.exceptions import EventPayloadError


def _nested_get(payload: dict[str, Any], *keys: str) -> Any:
    """Walk nested dictionaries, returning None as soon as a level is missing."""
    current: Any = payload
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


class TriggerEvent(BaseModel):
    """Pydantic model for the parts of a webhook payload this action reads."""

    model_config = ConfigDict(frozen=True)

    sender_login: str
    organization_login: str | None = None
    label_name: str | None = None
    action: str | None = None
    comment_body: str | None = None
    pull_request_number: int | None = None
    repository_owner: str | None = None
    repository_name: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TriggerEvent":
        """Build a trigger event from a ``pull_request`` or ``issue_comment`` webhook payload.

        Raises:
            EventPayloadError: If the payload has no sender login
        """
        sender_login = _nested_get(payload, "sender", "login")
        if not sender_login:
            raise EventPayloadError("Event payload does not contain sender.login")

        pull_request_number = (
            _nested_get(payload, "pull_request", "number") or _nested_get(payload, "issue", "number") or payload.get("number")
        )
        return cls(
            sender_login=sender_login,
            organization_login=_nested_get(payload, "organization", "login"),
            label_name=_nested_get(payload, "label", "name"),
            action=payload.get("action"),
            comment_body=_nested_get(payload, "comment", "body"),
            pull_request_number=pull_request_number,
            repository_owner=_nested_get(payload, "repository", "owner", "login"),
            repository_name=_nested_get(payload, "repository", "name"),
        )


def load_event(event_path: Path) -> TriggerEvent:
    """Load the trigger event from the JSON payload file written by the runner."""
    if not event_path.exists():
        raise EventPayloadError(f"Event payload file not found: {event_path}")
    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise EventPayloadError(f"Failed to parse event payload {event_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise EventPayloadError(f"Event payload {event_path} is not a JSON object")
    return TriggerEvent.from_payload(payload)
