"""
Exceptions raised inside a notification task.

None of these ever leave the task: the dispatcher logs them and drops the
notification for that single log entry.
"""

from typing import Any, Dict, Optional


class NotificationError(Exception):
    """Base exception for all notification errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(NotificationError):
    """
    Raised when an entity needed to describe a deployment does not exist.

    ``kind`` is one of Deployment, Application, Target or User and ``key`` is
    the identifier that was looked up.
    """

    def __init__(self, kind: str, key: Any):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}", {"kind": kind, "key": key})


class RenderError(NotificationError):
    """Raised when the summary template cannot be evaluated."""

    pass


class EncodingError(NotificationError):
    """Raised when the webhook payload cannot be serialized."""

    pass


class DeliveryFailure(NotificationError):
    """
    Raised when the webhook call fails.

    Either ``error`` holds the transport exception or ``status`` holds the
    status line of a non-200 response.
    """

    def __init__(
        self,
        message: str,
        status: Optional[str] = None,
        error: Optional[BaseException] = None,
    ):
        self.status = status
        self.error = error
        super().__init__(message, {"status": status, "error": str(error) if error else None})
