#!/usr/bin/env python
"""Echoes some text on stdout.

.. code-block:: console

    $ python examples/echo.py hello -t upper -n 2 --quotes
    "HELLO"
    "HELLO"
"""

from flagpole import ArgumentParser, FlagArgument, OptionalArgument, PositionalArgument

transforms = {
    "upper": str.upper,
    "lower": str.lower,
}

parser = ArgumentParser(summary="Echoes some text on stdout")

parser.add_argument(PositionalArgument("text", help="the text to print"))
parser.add_argument(FlagArgument("quotes", help="enclose the text within quotes"))
parser.add_argument(
    OptionalArgument(
        "transform",
        short_label="t",
        help="Transformation to apply to the text",
        choices=list(transforms),
    )
)

repetitions_argument = OptionalArgument("num", int, short_label="n", default=1, help="how many times to print the text")
parser.add_argument(repetitions_argument)


def main():
    result = parser.parse()

    # By argument
    repetitions = result.value(repetitions_argument)

    # By label
    text = result.str_value("text")
    if (transform := result.str_value("transform")) is not None:
        text = transforms[transform](text)
    if result.bool_value("quotes"):
        text = f'"{text}"'

    for _ in range(repetitions):
        print(text)


if __name__ == "__main__":
    main()
