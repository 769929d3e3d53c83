import pytest
from rich.console import Console

from flagpole import ArgumentParser


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def make_parser(console):
    """Factory for an :class:`ArgumentParser` that prints to the test console and never exits."""

    def inner(*arguments, **kwargs):
        kwargs.setdefault("prog", "prog")
        kwargs.setdefault("console", console)
        kwargs.setdefault("error_console", console)
        kwargs.setdefault("exit_on_error", False)
        return ArgumentParser(arguments, **kwargs)

    return inner
