"""Tests for the log stream."""

import threading

import pytest

from deploynotify.core.enum import EntryType
from deploynotify.core.stream import LogStream, StreamClosed, parse_log_entry
from deploynotify.dtos.deploy import LogEntry


def test_iteration_ends_when_closed():
    """Test that consumers receive every entry put before close."""
    stream = LogStream()
    entries = [LogEntry(i, EntryType.DEPLOYMENT_SUCCESS) for i in range(3)]
    for entry in entries:
        stream.put(entry)
    stream.close()

    assert list(stream) == entries
    assert list(stream) == []


def test_iteration_blocks_until_entry_arrives():
    """Test that a consumer waits for a producer on another thread."""
    stream = LogStream()
    received = []

    consumer = threading.Thread(target=lambda: received.extend(stream))
    consumer.start()

    stream.put(LogEntry(1, EntryType.DEPLOYMENT_START))
    stream.put(LogEntry(1, EntryType.DEPLOYMENT_FAIL))
    stream.close()
    consumer.join(timeout=5)

    assert not consumer.is_alive()
    assert [e.entry_type for e in received] == [EntryType.DEPLOYMENT_START, EntryType.DEPLOYMENT_FAIL]


def test_put_after_close_raises():
    stream = LogStream()
    stream.close()
    stream.close()

    assert stream.closed
    with pytest.raises(StreamClosed):
        stream.put(LogEntry(1))


def test_parse_log_entry():
    entry = parse_log_entry('{"deployment_id": 42, "entry_type": "DEPLOYMENT_SUCCESS"}')

    assert entry == LogEntry(42, EntryType.DEPLOYMENT_SUCCESS)


def test_parse_log_entry_defaults_to_other():
    assert parse_log_entry('{"deployment_id": "5"}') == LogEntry(5, EntryType.OTHER)


@pytest.mark.parametrize(
    "line",
    [
        "not json",
        "[1, 2]",
        '{"entry_type": "DEPLOYMENT_SUCCESS"}',
        '{"deployment_id": "abc"}',
        '{"deployment_id": 1, "entry_type": "UNKNOWN"}',
        '{"deployment_id": 1.9}',
        '{"deployment_id": true}',
        '{"deployment_id": null}',
        '{"deployment_id": "1.9"}',
    ],
)
def test_parse_log_entry_invalid(line):
    with pytest.raises(ValueError):
        parse_log_entry(line)


def test_put_racing_close_never_loses_entries():
    """Test that every accepted entry is received even when close races with put."""
    stream = LogStream()
    accepted = []
    lock = threading.Lock()

    def produce(start):
        for i in range(start, start + 200):
            try:
                stream.put(LogEntry(i, EntryType.DEPLOYMENT_SUCCESS))
            except StreamClosed:
                return
            with lock:
                accepted.append(i)

    producers = [threading.Thread(target=produce, args=(n * 1000,)) for n in range(4)]
    for producer in producers:
        producer.start()
    stream.close()
    for producer in producers:
        producer.join(timeout=5)

    assert sorted(e.deployment_id for e in stream) == sorted(accepted)
