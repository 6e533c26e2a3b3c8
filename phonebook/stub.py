"""
Required for static type checkers to accept these names as members of the
phonebook module.

This module gets imported into the phonebook module so stubs are accessible
through the phonebook namespace.

The doc strings for each function exists in the stubs for intellisense
fetching, instead of within the PhoneBook class itself because the PhoneBook
class is a module replacement at runtime, so the namespaces during inspection
are different.
"""

import os
from typing import Any
from typing import Callable
from typing import Optional
from typing import TypeVar
from typing import Union

from phonebook import handlers
from phonebook import subscriber


T = TypeVar("T")


# -----General Stubs-----------------------------------------------------------


def clear() -> None:
    """Clears both the subscription and entry tables."""


def clear_subscriptions() -> None:
    """Clears the subscription table, leaving entries alone."""


def clear_entries() -> None:
    """Clears the entry table, leaving subscriptions alone."""


# noinspection PyUnusedLocal
def set_flag_states(
    on_register: bool = False,
    on_unregister: bool = False,
    on_entry_added: bool = False,
    on_entry_removed: bool = False,
) -> None:
    """
    Set the notification flags on or off for each type of phone book activity.
    The phone book can be configured through any of the following:

    Args:
        on_register:       if True, phonebook.ON_SUBSCRIBER_REGISTERED is noticed whenever register() is called;
        on_unregister:     if True, phonebook.ON_SUBSCRIBER_UNREGISTERED is noticed whenever unregister() removes a subscriber;
        on_entry_added:    if True, phonebook.ON_ENTRY_ADDED is noticed whenever add_entry() is called;
        on_entry_removed:  if True, phonebook.ON_ENTRY_REMOVED is noticed whenever remove_entry() removes an entry.
    """


def to_dict() -> dict:
    """Convert the phone book structure to a dictionary."""


def to_string() -> str:
    """Returns a string representation of the phone book."""


# noinspection PyUnusedLocal
def export(filepath: Union[str, os.PathLike]) -> None:
    """Export phone book structure to filepath."""


def get_statistics() -> dict[str, object]:
    """
    Get overall phone book statistics.

    Returns:
        dict[str, object]: Dictionary with phone book wide statistics.
    Example:
        >>> phonebook.get_statistics()
        {'total_keywords': 1, 'total_subscriptions': 2, 'total_entries': 1, 'average_subscribers_per_keyword': 2.0}
    """


# -----Subscription Stubs------------------------------------------------------


def get_keywords() -> list[str]:
    """Get all keywords with at least one subscriber."""


# noinspection PyUnusedLocal
def keyword_exists(keyword: str) -> bool:
    """Check if a keyword has at least one subscriber."""


# noinspection PyUnusedLocal
def get_subscriber_count(keyword: str) -> int:
    """
    Get the number of registrations for a keyword.

    Args:
        keyword (str): Keyword to count subscribers for.
    Returns:
        int: Number of registrations, counting duplicates.
    """


# noinspection PyUnusedLocal
def register(keyword: str, handle: subscriber.SUBSCRIBER) -> None:
    """
    In order to be notified by a keyword, a subscriber must first be
    registered using this function.

    Registering the same subscriber twice under a keyword gets it notified
    twice.

    Args:
        keyword (str): The keyword associated to the subscriber.
        handle (SUBSCRIBER): Object implementing receive(keyword), or a
            callable accepting the keyword.
    Raises:
        TypeError: If handle can't receive a keyword.
    Example:
        >>> class Receiver:
        ...     def receive(self, keyword: str) -> None:
        ...         print(keyword)
        >>> receiver = Receiver()
        >>> phonebook.register('message', receiver)
        >>> phonebook.notice('message')
        message
    """


# noinspection PyUnusedLocal
def unregister(keyword: str, handle: subscriber.SUBSCRIBER) -> None:
    """
    Removes the first registration of a subscriber from a keyword.
    Unknown keywords and subscribers are ignored.

    Args:
        keyword (str): The keyword to unregister from.
        handle (SUBSCRIBER): The subscriber that must not be notified by the
            keyword anymore.
    """


# noinspection PyUnusedLocal
def subscribe(
    keyword: str,
) -> Callable[[Callable[[str], Any]], Callable[[str], Any]]:
    """
    Decorator to register a function as a subscriber.

    To register an object implementing receive(), or an instance method,
    use phonebook.register(keyword, handle).

    Args:
        keyword (str): The keyword to subscribe to.
    Example:
        >>> @phonebook.subscribe('app.ready')
        ... def on_ready(keyword: str) -> None:
        ...     print(keyword)
    """


# noinspection PyUnusedLocal
def notice(keyword: str) -> None:
    """
    When one or more subscribers have been registered to a keyword, calling
    this function from anywhere with the matching keyword notifies all those
    subscribers, in registration order, on the calling thread.

    Args:
        keyword (str): The keyword to notify the subscribers of.
    Note:
        With no exception handler installed, an exception raised by a
        subscriber propagates to the caller and the remaining subscribers are
        not notified.
    """


# noinspection PyUnusedLocal
def set_subscriber_exception_handler(
    handler: Optional[handlers.SUBSCRIPTION_EXCEPTION_HANDLER],
) -> None:
    """
    Set the exception handler for subscriber errors.
    The handler is called when a subscriber raises an exception during
    notice().

    Args:
        Optional[handlers.SUBSCRIPTION_EXCEPTION_HANDLER]:
            Callable with signature (SUBSCRIBER, str, Exception) -> bool.
            Returns True to stop delivery, False to continue.
            Pass None to restore default behavior (re-raise exceptions).
    """


# -----Entry Stubs-------------------------------------------------------------


def get_entry_names() -> list[str]:
    """Get all entry names."""


# noinspection PyUnusedLocal
def entry_exists(name: str) -> bool:
    """Check if an entry exists, even one holding None."""


# noinspection PyUnusedLocal
def add_entry(name: str, value: Any) -> None:
    """
    In order to call an object, it must be added to the entries using this
    function.

    Args:
        name (str): The unique identifier of the object.
        value (Any): The object itself. The phone book keeps a reference to
            it, not a copy.
    Raises:
        DuplicateNameError: If a value other than None is already registered
            under name. Remove it first to replace it.
    Example:
        >>> phonebook.add_entry('logger', logging.getLogger('app'))
        >>> # In another component:
        >>> log = phonebook.call('logger')
    """


# noinspection PyUnusedLocal
def remove_entry(name: str) -> None:
    """
    If an object must not be callable anymore, this function removes it from
    the entries. Unknown names are ignored.

    Args:
        name (str): The identifier of the object to remove.
    """


# noinspection PyUnusedLocal
def call(name: str) -> Optional[Any]:
    """
    Returns the object that matches the name, or None if there is none.

    The caller is responsible for knowing what type comes back. Use
    phonebook.call_as() to have it checked.

    Args:
        name (str): The identifier of the object.
    Returns:
        Optional[Any]: The object itself, not a copy.
    """


# noinspection PyUnusedLocal
def call_as(name: str, expected_type: type[T]) -> Optional[T]:
    """
    Typed version of call().

    Args:
        name (str): The identifier of the object.
        expected_type (type): The class the object must be an instance of.
    Returns:
        Optional[T]: The object, or None if nothing is registered under name.
    Raises:
        WrongTypeError: If the object isn't an instance of expected_type.
    Example:
        >>> log = phonebook.call_as('logger', logging.Logger)
    """
