"""GitHub Actions event descriptor parsing."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pr_reviewer.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PREvent:
    """The part of a pull_request event payload a review run needs."""

    number: int
    action: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "PREvent":
        """Validate a decoded event payload.

        Raises:
            ConfigurationError: If ``number`` is missing or not an integer
        """
        if not isinstance(payload, dict):
            raise ConfigurationError("Event payload must be a JSON object")

        number = payload.get("number")
        # bool is an int subclass; reject it explicitly
        if isinstance(number, bool) or not isinstance(number, int):
            raise ConfigurationError(f"Event payload has no integer 'number' field: {number!r}")
        if number < 1:
            raise ConfigurationError(f"Event 'number' must be positive, got {number}")

        action = payload.get("action")
        return cls(number=number, action=action if isinstance(action, str) else None)


def load_event(path: str | Path) -> PREvent:
    """Read and validate the event descriptor file.

    Args:
        path: Path from GITHUB_EVENT_PATH

    Returns:
        Parsed PREvent

    Raises:
        ConfigurationError: If the file is missing, not JSON, or malformed
    """
    event_path = Path(path)
    if not event_path.is_file():
        raise ConfigurationError(f"GITHUB_EVENT_PATH missing: {event_path}")

    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read event file {event_path}: {e}") from e

    event = PREvent.from_payload(payload)
    logger.debug(f"Loaded event for PR #{event.number} (action: {event.action})")
    return event
