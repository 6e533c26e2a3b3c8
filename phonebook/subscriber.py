"""
Subscriber type definitions for the phone book.

Defines the Subscriber protocol, the single-method capability an object needs
to be notified by a keyword, and the SUBSCRIBER alias used throughout the
package for type hints. Plain callables taking the keyword are accepted as
handles too, so functions can subscribe without a wrapping class.
"""

from typing import Any
from typing import Callable
from typing import Protocol
from typing import Union
from typing import runtime_checkable


@runtime_checkable
class Subscriber(Protocol):
    """Anything that wants to be notified when a keyword is noticed."""

    def receive(self, keyword: str) -> None:
        """
        Called when the keyword this subscriber registered with is noticed by
        any component in the same process.

        Args:
            keyword (str): The keyword that had the subscriber notified.
        """


SUBSCRIBER = Union[Subscriber, Callable[[str], Any]]
"""
A subscription handle. Either an object implementing receive(keyword) or a
callable accepting the keyword as its sole argument.

The phone book cannot send a value back to whoever noticed the keyword.
If you want data back, publish it as an entry and call() it.
"""


def is_subscriber(handle: object) -> bool:
    """Returns True if the handle can receive a keyword."""
    return isinstance(handle, Subscriber) or callable(handle)


def validate(handle: object) -> None:
    """
    Raise TypeError if the handle can't be notified.

    Args:
        handle (object): The object being registered.
    Raises:
        TypeError: If handle has no receive() method and is not callable.
    """
    if not is_subscriber(handle):
        raise TypeError(
            f"Subscriber must implement receive(keyword) or be callable, "
            f"got {handle.__class__.__name__}"
        )


def deliver(handle: SUBSCRIBER, keyword: str) -> None:
    """Forward the keyword to the handle's receive capability."""
    # Objects with receive() win over __call__ so a class can be both.
    if isinstance(handle, Subscriber):
        handle.receive(keyword)
    else:
        handle(keyword)


def get_handle_name(handle: SUBSCRIBER) -> str:
    """
    Returns a readable name for a handle, using class.method for bound methods,
    __qualname__ for functions and the class name for receive() objects.
    """
    if hasattr(handle, "__self__") and hasattr(handle, "__name__"):
        return f"{handle.__self__.__class__.__name__}.{handle.__name__}"
    elif isinstance(handle, Subscriber):
        return f"{handle.__class__.__name__}.receive"
    elif hasattr(handle, "__qualname__"):
        module = getattr(handle, "__module__", "<unknown>")
        return f"{module}.{handle.__qualname__}"
    else:
        return str(handle)
