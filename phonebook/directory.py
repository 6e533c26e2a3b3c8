"""
The phone book's registry as an explicit, instantiable context object.

A Directory owns the two tables the phone book is made of:

- The subscription table maps a keyword to the ordered list of subscribers
  that get notified when the keyword is noticed.
- The entry table maps a unique name to any object, letting components reach
  each other by name without holding references to one another.

The two tables are unrelated. Both are guarded by a re-entrant lock so a
Directory can be shared between threads, and so subscribers can call back
into the directory while being notified.

The phonebook module exposes one process-wide Directory. Construct your own
when you would rather pass a registry around explicitly.
"""

import json
import logging
import os
import threading
from typing import Any
from typing import Callable
from typing import Optional
from typing import TypeVar
from typing import Union

from phonebook import handlers
from phonebook import subscriber


logger = logging.getLogger(__name__)

T = TypeVar("T")

# -----Notifies----------------------------------------------------------------
_NOTIFY_KEYWORD_ROOT = "phonebook.notify."

ON_SUBSCRIBER_REGISTERED = f"{_NOTIFY_KEYWORD_ROOT}subscriber.registered"
ON_SUBSCRIBER_UNREGISTERED = f"{_NOTIFY_KEYWORD_ROOT}subscriber.unregistered"
ON_ENTRY_ADDED = f"{_NOTIFY_KEYWORD_ROOT}entry.added"
ON_ENTRY_REMOVED = f"{_NOTIFY_KEYWORD_ROOT}entry.removed"


# -----Exceptions--------------------------------------------------------------
class DuplicateNameError(KeyError):
    """Raised when adding an entry under a name that is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return (
            f"An entry named '{self.name}' already exists. "
            f"Remove it before adding a new one."
        )


class WrongTypeError(TypeError):
    """Raised by a typed lookup when the entry is not of the expected type."""

    def __init__(self, name: str, expected: type, actual: type) -> None:
        super().__init__(
            f"Entry '{name}' is a {actual.__name__}, expected {expected.__name__}"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


# -----------------------------------------------------------------------------


class Directory(object):
    """
    Keyword subscriptions and named entries for one application.

    To manage subscribers use register() and unregister(), or decorate
    functions with @subscribe(keyword). Notify them with notice().

    To manage entries use add_entry() and remove_entry(). Look them up with
    call(), or call_as() to check the type of what comes back.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

        self._subscriptions: dict[str, list[subscriber.SUBSCRIBER]] = {}
        """Keyword -> subscribers, in registration order. Duplicates allowed."""

        self._entries: dict[str, Any] = {}
        """Name -> the object registered under it."""

        # -----Exception Handlers-----
        # None re-raises subscriber errors to whoever called notice().
        self._subscriber_exception_handler: Optional[
            handlers.SUBSCRIPTION_EXCEPTION_HANDLER
        ] = None

        # -----Notifies-----
        self.notify_on_register: bool = False
        self.notify_on_unregister: bool = False
        self.notify_on_entry_added: bool = False
        self.notify_on_entry_removed: bool = False

    def clear(self) -> None:
        """Clears both the subscription and entry tables."""
        with self._lock:
            self._subscriptions.clear()
            self._entries.clear()

    def clear_subscriptions(self) -> None:
        """Clears the subscription table."""
        with self._lock:
            self._subscriptions.clear()

    def clear_entries(self) -> None:
        """Clears the entry table."""
        with self._lock:
            self._entries.clear()

    # -----Subscriber Management-----------------------------------------------

    def register(self, keyword: str, handle: subscriber.SUBSCRIBER) -> None:
        """
        Register a subscriber to a keyword.

        Registering the same subscriber twice under a keyword gets it notified
        twice.

        Args:
            keyword (str): The keyword to be notified by.
            handle (SUBSCRIBER): Object implementing receive(keyword), or a
                callable accepting the keyword.
        Raises:
            TypeError: If handle can't receive a keyword.
        Notes:
            Notices ON_SUBSCRIBER_REGISTERED if notify_on_register is set.
        """
        subscriber.validate(handle)

        with self._lock:
            self._subscriptions.setdefault(keyword, []).append(handle)
            notify = self.notify_on_register

        logger.debug(
            f"Registered {subscriber.get_handle_name(handle)} to '{keyword}'"
        )

        if notify and not keyword.startswith(_NOTIFY_KEYWORD_ROOT):
            self.notice(ON_SUBSCRIBER_REGISTERED)

    def unregister(self, keyword: str, handle: subscriber.SUBSCRIBER) -> None:
        """
        Remove the first registration of a subscriber from a keyword.

        Unknown keywords and subscribers are ignored.

        Args:
            keyword (str): The keyword to unregister from.
            handle (SUBSCRIBER): The subscriber that must not be notified by
                the keyword anymore.
        Notes:
            Notices ON_SUBSCRIBER_UNREGISTERED if notify_on_unregister is set
            and something was removed.
        """
        with self._lock:
            handles = self._subscriptions.get(keyword)
            if handles is None or handle not in handles:
                return

            handles.remove(handle)
            if not handles:
                del self._subscriptions[keyword]
            notify = self.notify_on_unregister

        logger.debug(
            f"Unregistered {subscriber.get_handle_name(handle)} from '{keyword}'"
        )

        if notify and not keyword.startswith(_NOTIFY_KEYWORD_ROOT):
            self.notice(ON_SUBSCRIBER_UNREGISTERED)

    def subscribe(
        self, keyword: str
    ) -> Callable[[Callable[[str], Any]], Callable[[str], Any]]:
        """
        Decorator to register a function as a subscriber.

        To register an object implementing receive(), or an instance method,
        use register(keyword, handle).

        Args:
            keyword (str): The keyword to subscribe to.
        """

        def decorator(func: Callable[[str], Any]) -> Callable[[str], Any]:
            self.register(keyword, func)
            return func

        return decorator

    def set_subscriber_exception_handler(
        self, handler: Optional[handlers.SUBSCRIPTION_EXCEPTION_HANDLER]
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
        with self._lock:
            self._subscriber_exception_handler = handler

    def notice(self, keyword: str) -> None:
        """
        Notify every subscriber registered to the keyword, in registration
        order, on the calling thread.

        Subscribers registered or unregistered while the notice is running
        only affect later notices.

        Args:
            keyword (str): The keyword to notify subscribers of.
        Note:
            With no exception handler installed, an exception raised by a
            subscriber propagates to the caller and the remaining subscribers
            are not notified.
        """
        with self._lock:
            handles = list(self._subscriptions.get(keyword, ()))
            exception_handler = self._subscriber_exception_handler

        for handle in handles:
            try:
                subscriber.deliver(handle, keyword)
            except Exception as e:
                if exception_handler is None:
                    raise

                stop = exception_handler(handle, keyword, e)
                if stop:
                    break

    # -----Entry Management----------------------------------------------------

    def add_entry(self, name: str, value: Any) -> None:
        """
        Add an object to the entries so any component can call() it by name.

        Args:
            name (str): The unique identifier of the object.
            value (Any): The object itself. The directory keeps a reference to
                it, not a copy.
        Raises:
            DuplicateNameError: If a value other than None is already
                registered under name. An entry holding None can be replaced
                without removing it first.
        Notes:
            Notices ON_ENTRY_ADDED if notify_on_entry_added is set. The entry
            is already stored by then, so an exception propagated from one of
            those subscribers leaves it in place. Only DuplicateNameError means
            nothing was added.
        """
        with self._lock:
            if self._entries.get(name) is not None:
                raise DuplicateNameError(name)
            self._entries[name] = value
            notify = self.notify_on_entry_added

        logger.debug(f"Added entry '{name}' ({value.__class__.__name__})")

        if notify:
            self.notice(ON_ENTRY_ADDED)

    def remove_entry(self, name: str) -> None:
        """
        Remove an object from the entries. Unknown names are ignored.

        Args:
            name (str): The identifier of the object to remove.
        Notes:
            Notices ON_ENTRY_REMOVED if notify_on_entry_removed is set and
            something was removed. The entry is already gone by then, so an
            exception propagated from one of those subscribers doesn't bring
            it back.
        """
        with self._lock:
            if name not in self._entries:
                return
            del self._entries[name]
            notify = self.notify_on_entry_removed

        logger.debug(f"Removed entry '{name}'")

        if notify:
            self.notice(ON_ENTRY_REMOVED)

    def call(self, name: str) -> Optional[Any]:
        """
        Returns the object registered under name, or None if there is none.

        The caller is responsible for knowing what type comes back. Use
        call_as() to have it checked.
        """
        with self._lock:
            return self._entries.get(name)

    def call_as(self, name: str, expected_type: type[T]) -> Optional[T]:
        """
        Typed version of call().

        Args:
            name (str): The identifier of the object.
            expected_type (type): The class the object must be an instance of.
        Returns:
            Optional[T]: The object, or None if nothing is registered under
                name.
        Raises:
            WrongTypeError: If the object isn't an instance of expected_type.
        """
        with self._lock:
            if name not in self._entries:
                return None
            value = self._entries[name]

        if not isinstance(value, expected_type):
            raise WrongTypeError(name, expected_type, value.__class__)

        return value

    # -----Notifies + Helpers--------------------------------------------------

    def set_flag_states(
        self,
        on_register: bool = False,
        on_unregister: bool = False,
        on_entry_added: bool = False,
        on_entry_removed: bool = False,
    ) -> None:
        """
        Set the notification flags on or off for each type of directory
        activity. The directory can be configured through any of the following:

        Args:
            on_register:       if True, get notified whenever register() is called;
            on_unregister:     if True, get notified whenever unregister() removes a subscriber;
            on_entry_added:    if True, get notified whenever add_entry() is called;
            on_entry_removed:  if True, get notified whenever remove_entry() removes an entry.
        """
        with self._lock:
            self.notify_on_register = on_register
            self.notify_on_unregister = on_unregister
            self.notify_on_entry_added = on_entry_added
            self.notify_on_entry_removed = on_entry_removed

    # -----Introspection API---------------------------------------------------

    def get_keywords(self) -> list[str]:
        """Get all keywords with at least one subscriber."""
        with self._lock:
            return sorted(self._subscriptions.keys())

    def keyword_exists(self, keyword: str) -> bool:
        """Check if a keyword has at least one subscriber."""
        with self._lock:
            return keyword in self._subscriptions

    def get_subscriber_count(self, keyword: str) -> int:
        """
        Get the number of registrations for a keyword.

        Args:
            keyword (str): Keyword to count subscribers for.
        Returns:
            int: Number of registrations, counting duplicates.
        """
        with self._lock:
            return len(self._subscriptions.get(keyword, ()))

    def get_entry_names(self) -> list[str]:
        """Get all entry names."""
        with self._lock:
            return sorted(self._entries.keys())

    def entry_exists(self, name: str) -> bool:
        """Check if an entry exists, even one holding None."""
        with self._lock:
            return name in self._entries

    def get_statistics(self) -> dict[str, object]:
        """
        Get overall directory statistics.

        Returns:
            dict[str, object]: Dictionary with directory-wide statistics.

        Example:
            {
                "total_keywords": 4,
                "total_subscriptions": 10,
                "total_entries": 3,
                "average_subscribers_per_keyword": 2.5,
            }
        """
        with self._lock:
            keyword_count = len(self._subscriptions)
            total_subscriptions = sum(
                len(handles) for handles in self._subscriptions.values()
            )
            entry_count = len(self._entries)

        return {
            "total_keywords": keyword_count,
            "total_subscriptions": total_subscriptions,
            "total_entries": entry_count,
            "average_subscribers_per_keyword": (
                total_subscriptions / keyword_count if keyword_count > 0 else 0
            ),
        }

    def to_dict(self) -> dict:
        """
        Convert the directory structure to a dictionary.
        Entries are described by their type name, never serialized.
        """
        with self._lock:
            subscriptions = {
                keyword: [
                    subscriber.get_handle_name(handle)
                    for handle in self._subscriptions[keyword]
                ]
                for keyword in sorted(self._subscriptions.keys())
            }
            entries = {
                name: self._entries[name].__class__.__name__
                for name in sorted(self._entries.keys())
            }

        return {"subscriptions": subscriptions, "entries": entries}

    def to_string(self) -> str:
        """Returns a string representation of the directory."""
        return json.dumps(self.to_dict(), indent=4)

    def export(self, filepath: Union[str, os.PathLike]) -> None:
        """Export directory structure to filepath."""
        with open(filepath, "w") as outfile:
            json.dump(self.to_dict(), outfile, indent=4)
