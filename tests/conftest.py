from typing import Iterator

import pytest

import phonebook


@pytest.fixture(autouse=True)
def restore_phonebook_defaults() -> Iterator[None]:
    """
    Handlers and flags outlive phonebook.clear(), so put them back after each
    test to keep one test's policy from leaking into the next.
    """
    yield
    phonebook.set_subscriber_exception_handler(None)
    phonebook.set_flag_states()
    phonebook.clear()
