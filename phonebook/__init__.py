"""
# Phone Book

Herein is the process-wide phone book as a module class, creating a protective
closure around the one Directory that holds the subscription and entry
tables.

Components notify each other by keyword:

    phonebook.register('message', receiver)   # receiver.receive('message')
    phonebook.notice('message')

And reach each other by name:

    phonebook.add_entry('logger', logger)
    logger = phonebook.call('logger')

A reimport protection clause exists at the top of the file to prevent the
tables from being lost on import.

Function stubs exist in the stubs file for static type checkers to validate
correct calls.

The Directory is created on first import and lives until the process exits.
Use phonebook.clear() to empty it. It is safe to share between threads.
Components that would rather have a registry injected can construct their own
phonebook.Directory().
"""

# Remember to update doc strings in the stub.py file so static type checkers
# and intellisense can receive accurate feedback!

import sys

# -----------------------------------------------------------------------------
# Prevent module reload - subscription and entry tables would be lost!
if "phonebook" in sys.modules:
    existing_module = sys.modules["phonebook"]
    if hasattr(existing_module, "_PHONEBOOK_IMPORT_GUARD"):
        raise ImportError(
            "Module 'phonebook' has already been imported and cannot be reloaded. "
            "Subscriptions and entries would be lost. "
            "Restart your Python session to reimport."
        )
_PHONEBOOK_IMPORT_GUARD = True
# -----------------------------------------------------------------------------

import os
from types import ModuleType
from typing import Any
from typing import Callable
from typing import Optional
from typing import Union

from phonebook.stub import *
from phonebook import directory
from phonebook import handlers
from phonebook import subscriber


version_major = 1
version_minor = 0
version_patch = 0
__version__ = f"{version_major}.{version_minor}.{version_patch}"

_DIRECTORY = directory.Directory()
"""Process-wide directory. Every module level call is forwarded here."""


class PhoneBook(ModuleType):
    """
    Process-wide keyword notifier and named object table.

    To manage subscribers use register() and unregister(), or decorate with
    @subscribe. Notify them with notice().

    To manage entries use add_entry() and remove_entry(). Look them up with
    call() or call_as().
    """

    # -----Runtime Closures----------------------------------------------------
    # ---Constants---
    __version__ = __version__
    _PHONEBOOK_IMPORT_GUARD = _PHONEBOOK_IMPORT_GUARD
    # Explicitly refuse to make closure for _DIRECTORY so it stays protected!

    # ---Exceptions---
    DuplicateNameError = directory.DuplicateNameError
    WrongTypeError = directory.WrongTypeError

    # ---Default Keywords---
    ON_SUBSCRIBER_REGISTERED = directory.ON_SUBSCRIBER_REGISTERED
    ON_SUBSCRIBER_UNREGISTERED = directory.ON_SUBSCRIBER_UNREGISTERED
    ON_ENTRY_ADDED = directory.ON_ENTRY_ADDED
    ON_ENTRY_REMOVED = directory.ON_ENTRY_REMOVED

    # ---Types---
    Directory = directory.Directory
    Subscriber = subscriber.Subscriber

    # ---Modules---
    directory = directory
    handlers = handlers
    subscriber = subscriber
    # -------------------------------------------------------------------------

    def __init__(self, name: str) -> None:
        super().__init__(name)
        assert self._PHONEBOOK_IMPORT_GUARD is True

    @staticmethod
    def clear() -> None:
        _DIRECTORY.clear()

    @staticmethod
    def clear_subscriptions() -> None:
        _DIRECTORY.clear_subscriptions()

    @staticmethod
    def clear_entries() -> None:
        _DIRECTORY.clear_entries()

    @staticmethod
    def set_flag_states(
        on_register: bool = False,
        on_unregister: bool = False,
        on_entry_added: bool = False,
        on_entry_removed: bool = False,
    ) -> None:
        _DIRECTORY.set_flag_states(
            on_register=on_register,
            on_unregister=on_unregister,
            on_entry_added=on_entry_added,
            on_entry_removed=on_entry_removed,
        )

    # -----Subscriber Management-----------------------------------------------

    @staticmethod
    def register(keyword: str, handle: subscriber.SUBSCRIBER) -> None:
        _DIRECTORY.register(keyword, handle)

    @staticmethod
    def unregister(keyword: str, handle: subscriber.SUBSCRIBER) -> None:
        _DIRECTORY.unregister(keyword, handle)

    @staticmethod
    def subscribe(
        keyword: str,
    ) -> Callable[[Callable[[str], Any]], Callable[[str], Any]]:
        return _DIRECTORY.subscribe(keyword)

    @staticmethod
    def notice(keyword: str) -> None:
        _DIRECTORY.notice(keyword)

    @staticmethod
    def set_subscriber_exception_handler(
        handler: Optional[handlers.SUBSCRIPTION_EXCEPTION_HANDLER],
    ) -> None:
        _DIRECTORY.set_subscriber_exception_handler(handler)

    # -----Entry Management----------------------------------------------------

    @staticmethod
    def add_entry(name: str, value: Any) -> None:
        _DIRECTORY.add_entry(name, value)

    @staticmethod
    def remove_entry(name: str) -> None:
        _DIRECTORY.remove_entry(name)

    @staticmethod
    def call(name: str) -> Optional[Any]:
        return _DIRECTORY.call(name)

    @staticmethod
    def call_as(name: str, expected_type: type) -> Optional[Any]:
        return _DIRECTORY.call_as(name, expected_type)

    # -----Introspection API---------------------------------------------------

    @staticmethod
    def get_keywords() -> list[str]:
        return _DIRECTORY.get_keywords()

    @staticmethod
    def keyword_exists(keyword: str) -> bool:
        return _DIRECTORY.keyword_exists(keyword)

    @staticmethod
    def get_subscriber_count(keyword: str) -> int:
        return _DIRECTORY.get_subscriber_count(keyword)

    @staticmethod
    def get_entry_names() -> list[str]:
        return _DIRECTORY.get_entry_names()

    @staticmethod
    def entry_exists(name: str) -> bool:
        return _DIRECTORY.entry_exists(name)

    @staticmethod
    def get_statistics() -> dict[str, object]:
        return _DIRECTORY.get_statistics()

    @staticmethod
    def to_dict() -> dict:
        return _DIRECTORY.to_dict()

    @staticmethod
    def to_string() -> str:
        return _DIRECTORY.to_string()

    @staticmethod
    def export(filepath: Union[str, os.PathLike]) -> None:
        _DIRECTORY.export(filepath)


# This is here to protect the _DIRECTORY, creating a protective closure.
custom_module = PhoneBook(sys.modules[__name__].__name__)
sys.modules[__name__] = custom_module
