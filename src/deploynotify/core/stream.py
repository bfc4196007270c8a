"""Closable in-process channel of log entries."""

import json
import queue
import threading
from typing import Iterator

from deploynotify.core.enum import EntryType
from deploynotify.dtos.deploy import LogEntry

_CLOSED = object()


class StreamClosed(Exception):
    """Raised when putting an entry on a closed stream."""


class LogStream:
    """A FIFO of log entries that consumers iterate until it is closed.

    Producers call ``put`` and finally ``close``. Iterating blocks until the
    next entry arrives and stops once every entry put before ``close`` has
    been received.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._closed = False
        # put and close must not interleave or an entry could land after the marker
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, entry: LogEntry) -> None:
        with self._lock:
            if self._closed:
                raise StreamClosed("log stream is closed")
            self._queue.put(entry)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[LogEntry]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                # leave the marker for any other consumer
                self._queue.put(_CLOSED)
                return
            yield item  # type: ignore[misc]


def parse_log_entry(line: str) -> LogEntry:
    """Parse one JSON encoded log entry.

    Raises:
        ValueError: if the line is not a valid log entry
    """
    data = json.loads(line)
    if not isinstance(data, dict):
        raise ValueError("log entry must be a JSON object")

    raw_id = data.get("deployment_id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)):
        raise ValueError(f"invalid deployment_id: {raw_id!r}")
    deployment_id = int(raw_id)

    return LogEntry(
        deployment_id=deployment_id,
        entry_type=EntryType(data.get("entry_type", EntryType.OTHER.value)),
    )
