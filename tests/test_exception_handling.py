"""
Unit tests for phone book exception handling capabilities.

Tests verify that a subscriber raising during notice() propagates its
exception by default, stopping delivery to the remaining subscribers, and that
the opt-in exception handler policies (stop, continue, silent, collecting)
behave as documented.
"""

import logging

import pytest

import phonebook
from phonebook import handlers


def test_default_propagates_and_stops_delivery() -> None:
    """Test that by default a subscriber's exception reaches the caller."""
    phonebook.clear()
    calls: list[str] = []

    def failing_handler(keyword: str) -> None:
        calls.append("failing")
        raise ValueError("Test exception")

    def should_not_run(keyword: str) -> None:
        calls.append("should_not_run")

    phonebook.register("test.event", failing_handler)
    phonebook.register("test.event", should_not_run)

    with pytest.raises(ValueError, match="Test exception"):
        phonebook.notice("test.event")

    assert calls == ["failing"]


def test_earlier_subscribers_still_ran() -> None:
    """Test that subscribers before the failing one have been notified."""
    phonebook.clear()
    calls: list[str] = []

    def before(keyword: str) -> None:
        calls.append("before")

    def failing_handler(keyword: str) -> None:
        raise RuntimeError("boom")

    phonebook.register("test.event", before)
    phonebook.register("test.event", failing_handler)

    with pytest.raises(RuntimeError):
        phonebook.notice("test.event")

    assert calls == ["before"]


def test_stop_and_log_handler_stops_without_raising(caplog) -> None:
    """Test that the stop policy logs the error and skips the rest."""
    phonebook.clear()
    phonebook.set_subscriber_exception_handler(
        handlers.stop_and_log_subscriber_exception
    )
    calls: list[str] = []

    def failing_handler(keyword: str) -> None:
        calls.append("failing")
        raise ValueError("Test exception")

    def should_not_run(keyword: str) -> None:
        calls.append("should_not_run")

    phonebook.register("test.event", failing_handler)
    phonebook.register("test.event", should_not_run)

    with caplog.at_level(logging.ERROR, logger="phonebook.handlers"):
        phonebook.notice("test.event")

    assert calls == ["failing"]
    assert "Exception in phone book subscriber" in caplog.text
    assert "failing_handler" in caplog.text


def test_log_and_continue_handler(caplog) -> None:
    """Test that the continue policy logs a warning and keeps delivering."""
    phonebook.clear()
    phonebook.set_subscriber_exception_handler(
        handlers.log_and_continue_subscriber_exception
    )
    calls: list[str] = []

    def failing_handler(keyword: str) -> None:
        raise ValueError("Test exception")

    def succeeding_handler(keyword: str) -> None:
        calls.append("succeeding")

    phonebook.register("test.event", failing_handler)
    phonebook.register("test.event", succeeding_handler)

    with caplog.at_level(logging.WARNING, logger="phonebook.handlers"):
        phonebook.notice("test.event")

    assert calls == ["succeeding"]
    assert "Subscriber error (continuing)" in caplog.text


def test_silent_exception_handler_continues() -> None:
    """Test that silent handler continues to next subscriber."""
    phonebook.clear()
    phonebook.set_subscriber_exception_handler(handlers.silent_subscriber_exception)
    calls: list[str] = []

    def failing_handler(keyword: str) -> None:
        calls.append("failing")
        raise ValueError("Test exception")

    def succeeding_handler(keyword: str) -> None:
        calls.append("succeeding")

    phonebook.register("test.event", failing_handler)
    phonebook.register("test.event", succeeding_handler)

    phonebook.notice("test.event")

    assert calls == ["failing", "succeeding"]


def test_collecting_exception_handler() -> None:
    """Test that collecting handler captures exception information."""
    phonebook.clear()
    handlers.exceptions_caught.clear()
    phonebook.set_subscriber_exception_handler(handlers.collect_subscriber_exception)

    class Fragile:
        def receive(self, keyword: str) -> None:
            raise KeyError("missing")

    def also_failing(keyword: str) -> None:
        raise ValueError("bad value")

    phonebook.register("test.event", Fragile())
    phonebook.register("test.event", also_failing)

    phonebook.notice("test.event")

    assert len(handlers.exceptions_caught) == 2
    assert handlers.exceptions_caught[0]["subscriber"] == "Fragile.receive"
    assert handlers.exceptions_caught[0]["keyword"] == "test.event"
    assert "KeyError" in handlers.exceptions_caught[0]["exception"]
    assert "ValueError: bad value" in handlers.exceptions_caught[1]["exception"]

    handlers.exceptions_caught.clear()


def test_custom_handler_receives_failure_details() -> None:
    """Test that a custom handler gets the subscriber, keyword and exception."""
    phonebook.clear()
    seen: list[tuple] = []

    def custom_handler(handle, keyword: str, exception: Exception) -> bool:
        seen.append((handle, keyword, exception))
        return handlers.CONTINUE

    def failing_handler(keyword: str) -> None:
        raise ValueError("Test exception")

    phonebook.set_subscriber_exception_handler(custom_handler)
    phonebook.register("test.event", failing_handler)
    phonebook.notice("test.event")

    assert len(seen) == 1
    assert seen[0][0] is failing_handler
    assert seen[0][1] == "test.event"
    assert isinstance(seen[0][2], ValueError)


def test_set_exception_handler_to_none_raises() -> None:
    """Test that setting exception handler back to None re-raises."""
    phonebook.clear()
    phonebook.set_subscriber_exception_handler(handlers.silent_subscriber_exception)
    phonebook.set_subscriber_exception_handler(None)

    def failing_handler(keyword: str) -> None:
        raise ValueError("Test exception")

    phonebook.register("test.event", failing_handler)

    with pytest.raises(ValueError, match="Test exception"):
        phonebook.notice("test.event")


def test_exception_handler_respects_keyword_isolation() -> None:
    """Test that a failure on one keyword doesn't affect another."""
    phonebook.clear()
    phonebook.set_subscriber_exception_handler(
        handlers.stop_and_log_subscriber_exception
    )
    calls: list[str] = []

    def failing_handler(keyword: str) -> None:
        raise ValueError("Test exception")

    def other_handler(keyword: str) -> None:
        calls.append(keyword)

    phonebook.register("keyword.a", failing_handler)
    phonebook.register("keyword.b", other_handler)

    phonebook.notice("keyword.a")
    phonebook.notice("keyword.b")

    assert calls == ["keyword.b"]


def test_handler_change_applies_to_next_notice() -> None:
    """
    Test that a notice keeps the exception handler it started with, even if
    a subscriber swaps it out halfway through.
    """
    phonebook.clear()
    phonebook.set_subscriber_exception_handler(handlers.silent_subscriber_exception)
    calls: list[str] = []

    def switch_to_raising(keyword: str) -> None:
        calls.append("switch")
        phonebook.set_subscriber_exception_handler(None)

    def failing_handler(keyword: str) -> None:
        calls.append("failing")
        raise ValueError("Test exception")

    def after(keyword: str) -> None:
        calls.append("after")

    phonebook.register("test.event", switch_to_raising)
    phonebook.register("test.event", failing_handler)
    phonebook.register("test.event", after)

    phonebook.notice("test.event")

    assert calls == ["switch", "failing", "after"]

    with pytest.raises(ValueError, match="Test exception"):
        phonebook.notice("test.event")
