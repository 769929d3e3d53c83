import os
import sys
import warnings
from collections.abc import Callable, Iterable
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from attrs import define, field

from flagpole.argument import Argument, ArgumentCollection, ArgumentStyle, HelpArgument
from flagpole.exceptions import FlagpoleError
from flagpole.help import format_help, format_usage
from flagpole.panel import ErrorPanel
from flagpole.parsing import parse_tokens
from flagpole.result import ParsingResult
from flagpole.utils import create_error_console_from_console

if TYPE_CHECKING:
    from rich.console import Console


class TestFramework(str, Enum):
    UNKNOWN = ""
    PYTEST = "pytest"


@lru_cache
def _detect_test_framework() -> TestFramework:
    """Detects if we are currently being ran in a test framework."""
    # "PYTEST_VERSION" is set as of pytest v8.2.0
    if "pytest" in sys.modules and os.environ.get("PYTEST_VERSION") is not None:
        return TestFramework.PYTEST
    else:
        return TestFramework.UNKNOWN


@lru_cache  # Prevent logging of multiple warnings
def _log_framework_warning(framework: TestFramework) -> None:
    """Warn about a parser reading :obj:`sys.argv` under a unit-test framework.

    Intended to catch developers calling ``parser.parse()`` in tests when they meant ``parser.parse([])``.
    """
    if framework == TestFramework.UNKNOWN:
        return
    message = f'ArgumentParser.parse invoked without tokens under unit-test framework "{framework.value}". Did you mean "parse([])"?'
    warnings.warn(UserWarning(message), stacklevel=3)


def _default_prog() -> str:
    if not sys.argv or not sys.argv[0]:
        return ""
    return Path(sys.argv[0]).name


def _help_argument_validator(instance, attribute, value: Argument):
    if value.style is not ArgumentStyle.HELP:
        raise TypeError(f"help_argument must be created with HelpArgument, got a {value.style.value} argument.")


@define
class ArgumentParser:
    """Parse command-line tokens against a list of expected arguments.

    .. code-block:: python

        from flagpole import ArgumentParser, FlagArgument, OptionalArgument, PositionalArgument

        parser = ArgumentParser(
            [
                PositionalArgument("text", help="the text to print"),
                FlagArgument("quotes", help="enclose the text within quotes"),
            ],
            summary="Echoes some text on stdout",
        )
        parser.add_argument(OptionalArgument("num", int, short_label="n", default=1))
        result = parser.parse()

    Raises
    ------
    DuplicateLabelError
        If two arguments share a label.
    """

    _arguments: ArgumentCollection = field(
        factory=ArgumentCollection,
        converter=ArgumentCollection,
        alias="arguments",
    )

    summary: str | None = field(default=None, kw_only=True)
    """Description displayed under the usage line on the help page."""

    _prog: str | None = field(default=None, alias="prog", kw_only=True)

    help_argument: Argument = field(factory=HelpArgument, validator=_help_argument_validator, kw_only=True)
    """
    Argument that, as the **first** token, displays the help page.
    Its labels are not checked against the labels of :attr:`arguments`.
    """

    help_handler: Callable[[], Any] | None = field(default=None, kw_only=True)
    """
    Invoked instead of printing the help page and exiting with status 0.
    """

    _console: Optional["Console"] = field(default=None, alias="console", kw_only=True)

    _error_console: Optional["Console"] = field(default=None, alias="error_console", kw_only=True)

    print_error: bool = field(default=True, kw_only=True)
    """Print the usage line and a rich-formatted error when parsing fails without an ``error_handler``."""

    exit_on_error: bool = field(default=True, kw_only=True)
    """Invoke ``sys.exit(1)`` when parsing fails without an ``error_handler``; otherwise re-raise."""

    def __attrs_post_init__(self):
        self._arguments.validate()

    @property
    def arguments(self) -> tuple[Argument, ...]:
        return tuple(self._arguments)

    @property
    def prog(self) -> str:
        """Program name on the usage line; defaults to the name of the running script."""
        return _default_prog() if self._prog is None else self._prog

    @prog.setter
    def prog(self, value: str | None):
        self._prog = value

    @property
    def console(self) -> "Console":
        if self._console is None:
            from rich.console import Console

            self._console = Console()
        return self._console

    @console.setter
    def console(self, console: Optional["Console"]):
        self._console = console

    @property
    def error_console(self) -> "Console":
        """Console errors are printed to; derived from :attr:`console` (on stderr) unless set."""
        if self._error_console is None:
            self._error_console = create_error_console_from_console(self.console)
        return self._error_console

    @error_console.setter
    def error_console(self, console: Optional["Console"]):
        self._error_console = console

    def add_argument(self, argument: Argument) -> None:
        """Append ``argument`` to the expected arguments.

        Raises
        ------
        DuplicateLabelError
            If ``argument`` shares a label with an existing argument.
            The parser is left unchanged.
        """
        arguments = self._arguments.copy()
        arguments.append(argument)
        arguments.validate()
        self._arguments = arguments

    @property
    def usage(self) -> str:
        return format_usage(self.prog, self.help_argument, self._arguments)

    @property
    def help_text(self) -> str:
        return format_help(self.prog, self.summary, self.help_argument, self._arguments)

    def help_print(self, console: Optional["Console"] = None) -> None:
        """Print the help page."""
        from rich.text import Text

        console = console or self.console
        console.print(Text(self.help_text), end="")

    def parse(
        self,
        tokens: None | Iterable[str] = None,
        *,
        error_handler: Callable[[FlagpoleError], Any] | None = None,
    ) -> ParsingResult:
        """Parse the command-line tokens.

        If the first token is a label of :attr:`help_argument`, nothing is parsed:
        :attr:`help_handler` is invoked, or the help page is printed and the process exits with status 0.

        Parameters
        ----------
        tokens: None | Iterable[str]
            Already split tokens. Defaults to ``sys.argv[1:]``.
        error_handler: Callable[[FlagpoleError], Any] | None
            Invoked with the error when parsing fails.
            If not provided, follows :attr:`print_error` and :attr:`exit_on_error`.

        Returns
        -------
        ParsingResult
            Parsed values; empty if help was requested or ``error_handler`` handled an error.
        """
        if tokens is None:
            _log_framework_warning(_detect_test_framework())
            tokens = sys.argv[1:]
        else:
            tokens = list(tokens)

        if tokens and tokens[0] in self.help_argument.all_labels:
            if self.help_handler is None:
                self.help_print()
                sys.exit(0)
            self.help_handler()
            return ParsingResult()

        try:
            return parse_tokens(self._arguments, tokens)
        except FlagpoleError as e:
            e.root_input_tokens = tokens
            if e.console is None:
                e.console = self.error_console

            if error_handler is not None:
                error_handler(e)
                return ParsingResult()

            if self.print_error:
                e.console.print(ErrorPanel(e, usage=self.usage))
            if self.exit_on_error:
                sys.exit(1)
            raise
