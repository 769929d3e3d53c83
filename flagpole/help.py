"""Plain-text usage line and help page."""

from collections.abc import Iterable

from flagpole.argument import Argument, ArgumentCollection, ArgumentStyle
from flagpole.labels import placeholder_argument_string

FIRST_COLUMN_WIDTH = 30
"""Width the ``label PLACEHOLDER<type>`` column is padded to on the help page."""


def placeholder(argument: Argument) -> str:
    """``" NUM"`` for an optional argument ``--num``; empty for every other style."""
    if argument.style.requires_trailing_value:
        return " " + placeholder_argument_string(argument.label)
    return ""


def type_specification(argument: Argument) -> str:
    """``"<int>"``, ``"<float>"`` or ``"<bool>"``; empty for text and for arguments that take no value."""
    if argument.kind.is_text or not argument.style.requires_value:
        return ""
    return f"<{argument.kind.value}>"


def compact_usage(argument: Argument) -> str:
    """How ``argument`` shows up on the usage line, e.g. ``[-n NUM<int>]`` or ``file``."""
    label = argument.compact_label + placeholder(argument) + type_specification(argument)
    if argument.is_optional:
        return f"[{label}]"
    return label


def format_argument(argument: Argument) -> str:
    """Single entry of the help page.

    .. code-block:: text

        --num, -n NUM<int>            how many times to print the text
                Possible values: '1' | '2' | '3'
    """
    first_column = argument.label
    if argument.short_label is not None:
        first_column += ", " + argument.short_label
    first_column += placeholder(argument) + type_specification(argument)

    if argument.help is None:
        output = first_column
    elif len(first_column) < FIRST_COLUMN_WIDTH:
        output = first_column.ljust(FIRST_COLUMN_WIDTH) + argument.help
    else:
        output = first_column + " " + argument.help

    if argument.choices:
        choices = " | ".join(f"'{x.to_text()}'" for x in argument.choices)
        output += f"\n\t\tPossible values: {choices}"
    return output


def format_usage(prog: str, help_argument: Argument, arguments: Iterable[Argument]) -> str:
    """``usage: <prog> [-h] <optionals...> <positionals...>``."""
    arguments = ArgumentCollection(arguments)
    flag_like = [help_argument, *arguments.filter_by(ArgumentStyle.OPTIONAL, ArgumentStyle.FLAG)]
    parts = [
        f"usage: {prog}",
        " ".join(compact_usage(x) for x in flag_like),
        " ".join(compact_usage(x) for x in arguments.positionals),
    ]
    return " ".join(x for x in parts if x)


def format_help(prog: str, summary: str | None, help_argument: Argument, arguments: Iterable[Argument]) -> str:
    """Full help page: usage line, summary, then the positional and optional sections sorted by label."""
    arguments = ArgumentCollection(arguments)
    output = format_usage(prog, help_argument, arguments) + "\n"

    if summary:
        output += "\n" + summary + "\n"

    sections = (
        ("positional", (ArgumentStyle.POSITIONAL,)),
        ("optional", (ArgumentStyle.HELP, ArgumentStyle.OPTIONAL, ArgumentStyle.FLAG)),
    )
    for title, styles in sections:
        section = sorted((x for x in [help_argument, *arguments] if x.style in styles), key=lambda x: x.label)
        if section:
            output += f"\n{title} arguments:"
            output += "".join("\n\t" + format_argument(x) for x in section)
            output += "\n"

    return output
