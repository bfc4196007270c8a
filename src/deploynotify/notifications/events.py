from dataclasses import dataclass
from typing import Optional

from deploynotify.core.enum import EntryType
from deploynotify.dtos.deploy import LogEntry


class NotificationEvent:
    """Base class for all notification events."""

    type: str


@dataclass(frozen=True)
class DeployFinishedEvent(NotificationEvent):
    deployment_id: int
    success: bool
    type: str = "deploy_finished"

    @classmethod
    def from_log_entry(cls, entry: LogEntry) -> Optional["DeployFinishedEvent"]:
        """Return the event for a finished deployment, or None for any other entry."""
        if entry.entry_type == EntryType.DEPLOYMENT_SUCCESS:
            return cls(deployment_id=entry.deployment_id, success=True)
        if entry.entry_type == EntryType.DEPLOYMENT_FAIL:
            return cls(deployment_id=entry.deployment_id, success=False)
        return None
