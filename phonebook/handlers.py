"""
Exception handling utilities for the phone book.

By default a subscriber that raises during notice() propagates its exception
to whoever noticed the keyword, and the remaining subscribers are skipped.
The policies here are opt-in replacements installed through
phonebook.set_subscriber_exception_handler(): stopping delivery with logging
(stop_and_log_subscriber_exception), logging and continuing
(log_and_continue_subscriber_exception), silently continuing
(silent_subscriber_exception), and collecting exceptions for batch processing
(collect_subscriber_exception).
"""

import logging
import sys
from typing import Callable

from phonebook import subscriber


logger = logging.getLogger(__name__)


SUBSCRIPTION_EXCEPTION_HANDLER = Callable[[subscriber.SUBSCRIBER, str, Exception], bool]
"""
Signature for exception handlers.

Exception handlers receive the failing subscriber, keyword, and exception,
then return True to stop delivery or False to continue to remaining
subscribers.
"""

STOP = True
CONTINUE = False


def stop_and_log_subscriber_exception(
    handle: subscriber.SUBSCRIBER, keyword: str, exception: Exception
) -> bool:
    """Handler that stops delivery and logs the raised exception."""
    logger.error(
        f"Exception in phone book subscriber:\n"
        f"  Keyword:    {keyword}\n"
        f"  Subscriber: {subscriber.get_handle_name(handle)}\n"
        f"  Exception:  {exception.__class__.__name__}: {exception}",
        exc_info=True,
    )

    return STOP


def log_and_continue_subscriber_exception(
    handle: subscriber.SUBSCRIBER, keyword: str, exception: Exception
) -> bool:
    """Log subscriber errors but continue processing."""
    logger.warning(
        f"Subscriber error (continuing): "
        f"{subscriber.get_handle_name(handle)} on {keyword}: {exception}"
    )
    return CONTINUE


def silent_subscriber_exception(
    _: subscriber.SUBSCRIBER, __: str, ___: Exception
) -> bool:
    """Silently ignore all exceptions."""
    return CONTINUE


exceptions_caught = []


def collect_subscriber_exception(
    handle: subscriber.SUBSCRIBER, keyword: str, exception: Exception
) -> bool:
    """
    Collect exceptions for batch processing.
    This appends exceptions caught to phonebook.handlers.exceptions_caught
    which is a list.
    Either manage the list manually or use this function as an example to
    create a more robust exception collector.
    """
    exceptions_caught.append(
        {
            "subscriber": subscriber.get_handle_name(handle),
            "keyword": keyword,
            "exception": f"{exception.__class__.__name__}: {exception}",
            "exc_info": sys.exc_info(),
        }
    )
    return CONTINUE
