import sys
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, NoReturn, TypeVar

from flagpole.exceptions import FlagpoleUsageError
from flagpole.panel import ErrorPanel

if TYPE_CHECKING:
    from rich.console import Console

    from flagpole.argument import Argument
    from flagpole.result import ParsingResult

V = TypeVar("V")

EXIT_CODE_USAGE_ERROR = 2
"""Exit status when the program misuses Flagpole."""


def die(error: FlagpoleUsageError | str, console: "Console | None" = None) -> NoReturn:
    """Print a fatal library-usage error and exit with status :data:`EXIT_CODE_USAGE_ERROR`."""
    if console is None:
        from rich.console import Console

        console = Console(stderr=True)
    if isinstance(error, str):
        error = FlagpoleUsageError(error)
    console.print(ErrorPanel(error))
    sys.exit(EXIT_CODE_USAGE_ERROR)


def run(
    main: Callable[["ParsingResult"], V],
    /,
    *arguments: "Argument",
    summary: str | None = None,
    tokens: Iterable[str] | None = None,
    error_console: "Console | None" = None,
) -> V:
    """Parse the command line and hand the result to ``main``.

    This function is syntax sugar for very simple scripts, and is roughly equivalent to:

    .. code-block:: python

        from flagpole import ArgumentParser

        parser = ArgumentParser(arguments, summary=summary)
        main(parser.parse())

    Unlike the expanded form, any :class:`~flagpole.FlagpoleUsageError` (a duplicated label,
    an invalid declaration, a mistyped result lookup inside ``main``) is printed and
    terminates the process with status 2.

    Example usage:

    .. code-block:: python

        import flagpole


        def main(result):
            print("Hello", result.str_value("name"))


        flagpole.run(main, flagpole.PositionalArgument("name"))
    """
    from flagpole.parser import ArgumentParser

    try:
        parser = ArgumentParser(arguments, summary=summary, error_console=error_console)
        return main(parser.parse(tokens))
    except FlagpoleUsageError as e:
        die(e, error_console)
