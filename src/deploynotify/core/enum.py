from enum import Enum


class EntryType(str, Enum):
    """Kinds of log entries emitted while a deployment runs."""

    OTHER = "OTHER"
    COMMAND_START = "COMMAND_START"
    COMMAND_OUTPUT = "COMMAND_OUTPUT"
    COMMAND_SUCCESS = "COMMAND_SUCCESS"
    COMMAND_FAIL = "COMMAND_FAIL"
    DEPLOYMENT_START = "DEPLOYMENT_START"
    DEPLOYMENT_SUCCESS = "DEPLOYMENT_SUCCESS"
    DEPLOYMENT_FAIL = "DEPLOYMENT_FAIL"


class NotificationOutcome(str, Enum):
    """Terminal state of a single notification task."""

    DISABLED = "disabled"
    RESOLUTION_FAILED = "resolution_failed"
    RENDER_FAILED = "render_failed"
    DELIVERED = "delivered"
    DELIVERY_FAILED = "delivery_failed"
