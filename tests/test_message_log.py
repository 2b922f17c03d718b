"""Tests for the bounded message log."""

from __future__ import annotations

import errno
import logging

import pytest

from devchat.core.exceptions import InvalidOffsetError, NoContentError
from devchat.log import LogState, MessageLog


@pytest.fixture(name="log")
def fixture_log() -> MessageLog:
    return MessageLog()


def test_defaults_match_device_limits(log):
    assert log.max_entries == 255
    assert log.max_message_len == 255
    assert len(log) == 0
    assert log.state is LogState.EMPTY


def test_read_returns_messages_oldest_first_without_delimiters(log):
    for chunk in (b"a", b"b", b"c"):
        log.append(chunk)

    assert log.read_all() == b"abc"


def test_round_trip_then_clear(log):
    log.append(b"hello")
    log.append(b"world")
    assert log.read_all() == b"helloworld"

    log.clear()

    with pytest.raises(NoContentError):
        log.read_all()


def test_oversized_message_is_truncated_not_rejected(log):
    stored = log.append(b"x" * 300)

    assert stored == 255
    assert log.read_all() == b"x" * 255
    assert log.metrics["truncations"] == 1


def test_message_at_limit_is_kept_whole(log):
    assert log.append(b"y" * 255) == 255
    assert log.metrics["truncations"] == 0


def test_append_accepts_bytes_like_objects(log):
    log.append(bytearray(b"ab"))
    log.append(memoryview(b"cd"))

    assert log.read_all() == b"abcd"


def test_append_rejects_text(log):
    with pytest.raises(TypeError):
        log.append("not bytes")  # type: ignore[arg-type]


def test_empty_message_makes_log_non_empty(log):
    assert log.append(b"") == 0

    assert len(log) == 1
    assert log.state is LogState.NON_EMPTY
    assert log.read_all() == b""


def test_eviction_keeps_the_newest_entries(log):
    messages = [f"{index:03d}".encode() for index in range(log.max_entries + 1)]
    for message in messages:
        log.append(message)

    assert len(log) == log.max_entries
    assert log.read_all() == b"".join(messages[1:])
    assert log.metrics["evictions"] == 1


def test_capacity_holds_after_every_append():
    log = MessageLog(max_entries=3)
    for index in range(10):
        log.append(str(index).encode())
        assert len(log) <= 3

    assert log.read_all() == b"789"
    assert log.metrics["evictions"] == 7


def test_non_zero_offset_write_is_rejected_and_log_unchanged(log):
    log.append(b"first")

    with pytest.raises(InvalidOffsetError) as excinfo:
        log.append(b"second", offset=5)

    assert excinfo.value.errno == errno.EINVAL
    assert len(log) == 1
    assert log.read_all() == b"first"


def test_offset_rejection_on_empty_log_leaves_it_empty(log):
    with pytest.raises(InvalidOffsetError):
        log.append(b"data", offset=1)

    assert log.state is LogState.EMPTY


def test_partial_reads_clip_to_available_bytes(log):
    log.append(b"hello")
    log.append(b"world")

    assert log.read_all(offset=3, length=4) == b"lowo"
    assert log.read_all(offset=8, length=100) == b"rld"
    assert log.read_all(offset=2) == b"lloworld"
    assert log.read_all(length=0) == b""


def test_read_at_or_past_end_returns_nothing(log):
    log.append(b"abc")

    assert log.read_all(offset=3) == b""
    assert log.read_all(offset=50, length=10) == b""


def test_read_rejects_negative_arguments(log):
    log.append(b"abc")

    with pytest.raises(InvalidOffsetError):
        log.read_all(offset=-1)
    with pytest.raises(ValueError):
        log.read_all(length=-1)


def test_empty_read_is_reported_before_offset_checks(log):
    with pytest.raises(NoContentError) as excinfo:
        log.read_all(offset=10, length=10)

    assert excinfo.value.errno == errno.ENOMSG
    assert log.metrics["empty_reads"] == 1


def test_clear_is_idempotent(log):
    assert log.clear() == 0
    assert len(log) == 0

    log.append(b"a")
    log.append(b"b")
    assert log.clear() == 2
    assert log.clear() == 0
    assert len(log) == 0
    assert log.state is LogState.EMPTY


def test_clear_resets_count_so_capacity_is_reusable():
    log = MessageLog(max_entries=2)
    log.append(b"a")
    log.append(b"b")
    log.clear()

    log.append(b"c")
    log.append(b"d")

    assert len(log) == 2
    assert log.read_all() == b"cd"
    assert log.metrics["evictions"] == 0


def test_binary_content_is_returned_verbatim(log):
    log.append(b"a\x00b")
    log.append(b"\xff")

    assert log.read_all() == b"a\x00b\xff"


def test_metrics_track_operations(log):
    log.append(b"abc")
    log.read_all()
    log.clear()

    metrics = log.metrics
    assert metrics["appends"] == 1
    assert metrics["bytes_stored"] == 3
    assert metrics["reads"] == 1
    assert metrics["clears"] == 1
    assert metrics["entries_cleared"] == 1


@pytest.mark.parametrize("kwargs", [{"max_entries": 0}, {"max_message_len": 0}])
def test_limits_must_be_positive(kwargs):
    with pytest.raises(ValueError):
        MessageLog(**kwargs)


def test_sequence_numbers_keep_growing_across_clear(log, caplog):
    caplog.set_level(logging.DEBUG, logger="MessageLog")

    log.append(b"a")
    log.append(b"b")
    log.clear()
    log.append(b"c")

    sequences = [
        record.args[0] for record in caplog.records if record.msg.startswith("Appended message")
    ]
    assert sequences == [0, 1, 2]
