"""Turn finished deployments into chat notifications.

The dispatcher consumes a stream of log entries. Every entry that marks the
end of a deployment gets its own task which resolves the deployment, renders
a summary and posts it to the target's webhook. The consuming loop never waits
for those tasks and no task failure ever reaches it.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional

from deploynotify.config import Config
from deploynotify.core.enum import NotificationOutcome
from deploynotify.core.resolver import EntityResolver
from deploynotify.core.storage import Storage
from deploynotify.dtos.deploy import LogEntry
from deploynotify.messages import notify as msg
from deploynotify.notifications.channels.base import NotificationChannel
from deploynotify.notifications.channels.slack import SlackChannel, SlackWebhookClient
from deploynotify.notifications.errors import NotFoundError, RenderError
from deploynotify.notifications.events import DeployFinishedEvent
from deploynotify.notifications.renderer import SummaryRenderer

logger = logging.getLogger(__name__)

Listener = Callable[[Iterable[LogEntry]], None]

_NOT_FOUND_MESSAGES = {
    "Application": msg.APPLICATION_NOT_FOUND,
    "Target": msg.TARGET_NOT_FOUND,
    "User": msg.USER_NOT_FOUND,
}


class NotificationDispatcher:
    def __init__(
        self,
        resolver: EntityResolver,
        renderer: SummaryRenderer,
        channel: NotificationChannel,
        executor: Optional[Executor] = None,
    ):
        self.resolver = resolver
        self.renderer = renderer
        self.channel = channel
        # Without an executor every task gets its own thread, unbounded.
        self.executor = executor

    @classmethod
    def from_config(
        cls,
        config: Config,
        storage: Storage,
        executor: Optional[Executor] = None,
    ) -> "NotificationDispatcher":
        if executor is None and config.notifier.max_workers:
            executor = ThreadPoolExecutor(
                max_workers=config.notifier.max_workers,
                thread_name_prefix="deploynotify",
            )

        return cls(
            resolver=EntityResolver(storage, config),
            renderer=SummaryRenderer(config.server, config.notifier.template),
            channel=SlackChannel(SlackWebhookClient(timeout=config.notifier.timeout)),
            executor=executor,
        )

    def notify(self, deployment_id: int, success: bool) -> NotificationOutcome:
        """Run the whole notification pipeline for one deployment.

        Every failure is logged here and reported through the returned outcome.
        """
        try:
            resolved = self.resolver.resolve(deployment_id)
        except NotFoundError as e:
            template = _NOT_FOUND_MESSAGES.get(e.kind)
            if template is None:
                logger.error(msg.DEPLOYMENT_NOT_FOUND, deployment_id, e)
            else:
                logger.error(template, e.key, deployment_id, e)
            return NotificationOutcome.RESOLUTION_FAILED

        if not resolved.target.slack_url:
            logger.debug(
                msg.NOTIFICATIONS_DISABLED,
                resolved.application.name,
                resolved.target.name,
                deployment_id,
            )
            return NotificationOutcome.DISABLED

        try:
            summary = self.renderer.render(
                resolved.deployment, resolved.application, resolved.user, success
            )
        except RenderError as e:
            logger.error(msg.COULD_NOT_RENDER_SUMMARY, deployment_id, e)
            return NotificationOutcome.RENDER_FAILED

        if self.channel.send(resolved, summary):
            return NotificationOutcome.DELIVERED
        return NotificationOutcome.DELIVERY_FAILED

    def handle(self, event: DeployFinishedEvent) -> Optional[NotificationOutcome]:
        try:
            return self.notify(event.deployment_id, event.success)
        except Exception:
            logger.exception("Unexpected error notifying about deployment %s", event.deployment_id)
            return None

    def dispatch(self, entry: LogEntry) -> Optional[Any]:
        """Start a notification task for ``entry`` without waiting for it.

        Returns:
            The thread or future running the task, or None when the entry does
            not finish a deployment
        """
        event = DeployFinishedEvent.from_log_entry(entry)
        if event is None:
            return None

        if self.executor is not None:
            return self.executor.submit(self.handle, event)

        thread = threading.Thread(
            target=self.handle,
            args=(event,),
            name=f"deploynotify-{event.deployment_id}",
            daemon=True,
        )
        thread.start()
        return thread

    def listen(self, stream: Iterable[LogEntry]) -> int:
        """Consume ``stream`` until it is closed and return how many tasks were started."""
        dispatched = 0
        for entry in stream:
            if self.dispatch(entry) is not None:
                dispatched += 1

        logger.debug(msg.LISTENER_STOPPED, dispatched)
        return dispatched

    def listener(self) -> Listener:
        def listen(stream: Iterable[LogEntry]) -> None:
            self.listen(stream)

        return listen

    def listen_in_background(self, stream: Iterable[LogEntry]) -> threading.Thread:
        thread = threading.Thread(
            target=self.listen, args=(stream,), name="deploynotify-listener", daemon=True
        )
        thread.start()
        return thread
