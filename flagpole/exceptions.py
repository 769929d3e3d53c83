from typing import TYPE_CHECKING, Optional

from attrs import define, field

from flagpole.value import Kind, Value

if TYPE_CHECKING:
    from rich.console import Console

    from flagpole.argument import Argument, ArgumentStyle


__all__ = [
    "DeclarationError",
    "DuplicateLabelError",
    "FlagpoleError",
    "FlagpoleUsageError",
    "InvalidLabelError",
    "InvalidTypeError",
    "NotInChoicesError",
    "ParameterExpectedError",
    "PositionalLabelIsFlagError",
    "ResultTypeError",
    "ShortLabelIsLongFlagError",
    "TooFewArgumentsError",
    "UnexpectedPositionalError",
]


####################################
# Library misuse (developer errors) #
####################################


class FlagpoleUsageError(Exception):
    """Root exception for errors caused by the program using Flagpole, rather than by its end-user.

    This doesn't derive from :class:`FlagpoleError` so that parse-time error handlers never swallow it.
    """


class DeclarationError(FlagpoleUsageError):
    """An :class:`~flagpole.Argument` could not be declared."""


@define(kw_only=True)
class InvalidLabelError(DeclarationError):
    """A label, after normalization, is not a valid argument name."""

    style: "ArgumentStyle"
    """Style of the rejected declaration."""

    labels: tuple[str, ...]
    """Every (normalized) label of the rejected declaration."""

    invalid_label: str
    """First label that failed validation."""

    def __str__(self):
        labels = ", ".join(repr(x) for x in self.labels)
        return f"invalid label {self.invalid_label!r} in {self.style.value} argument ({labels})."


@define(kw_only=True)
class ShortLabelIsLongFlagError(DeclarationError):
    """A short label was given with the long-flag prefix ``--``."""

    short_label: str

    def __str__(self):
        return f"short label {self.short_label!r} can not be a long flag."


@define(kw_only=True)
class PositionalLabelIsFlagError(DeclarationError):
    """A positional argument was declared with a ``-`` or ``--`` prefixed label."""

    label: str

    def __str__(self):
        return f"positional argument label {self.label!r} can not be flag-styled."


@define(kw_only=True)
class DuplicateLabelError(FlagpoleUsageError):
    """More than one argument declares the same label."""

    label: str

    def __str__(self):
        return f"more than one argument with the same label '{self.label}'"


@define(kw_only=True)
class ResultTypeError(FlagpoleUsageError, TypeError):
    """A parsed value was requested with a type different from the one stored."""

    label: str
    requested: Kind
    actual: Kind

    def __str__(self):
        return (
            f"value for label '{self.label}' has actual type '{self.actual.value}' "
            f"and not requested type '{self.requested.value}'"
        )


######################
# Parse-time errors  #
######################


@define
class FlagpoleError(Exception):
    """Root exception for errors caused by the command-line tokens.

    As a FlagpoleError bubbles up to the :class:`~flagpole.ArgumentParser`, more information is added to it.
    """

    msg: str | None = None
    """
    If set, override automatic message generation.
    """

    root_input_tokens: list[str] | None = None
    """
    The CLI tokens that were initially fed into the parser.
    """

    argument: Optional["Argument"] = None
    """
    :class:`~flagpole.Argument` that was being matched.
    """

    console: Optional["Console"] = field(default=None, kw_only=True)
    """:class:`~rich.console.Console` to display runtime errors."""

    def __str__(self):
        if self.msg is not None:
            return self.msg
        return ""


@define(kw_only=True)
class ParameterExpectedError(FlagpoleError):
    """An optional argument's label was not followed by a usable value token.

    Raised both at the end of the token stream and when the next token is itself flag-styled.
    """

    def __str__(self):
        if self.msg is not None:
            return self.msg
        assert self.argument is not None
        return f"argument {self.argument.label}: expected one argument"


@define(kw_only=True)
class UnexpectedPositionalError(FlagpoleError):
    """A bare token arrived when every positional argument was already bound."""

    token: str

    def __str__(self):
        if self.msg is not None:
            return self.msg
        return f"unrecognized parameter: {self.token}"


@define(kw_only=True)
class InvalidTypeError(FlagpoleError):
    """A token could not be converted into the argument's kind."""

    token: str

    def __str__(self):
        if self.msg is not None:
            return self.msg
        assert self.argument is not None
        return f"argument {self.argument.label}: invalid {self.argument.kind.value} value: {self.token}"


@define(kw_only=True)
class NotInChoicesError(FlagpoleError):
    """A token converted successfully, but isn't one of the argument's choices."""

    choices: tuple[Value, ...]
    token: str

    def __str__(self):
        if self.msg is not None:
            return self.msg
        assert self.argument is not None
        choices = ", ".join(f"'{x.to_text()}'" for x in self.choices)
        return f"argument {self.argument.label}: '{self.token}' is not in the list of possible choices: {choices}"


@define(kw_only=True)
class TooFewArgumentsError(FlagpoleError):
    """At least one positional argument was never bound."""

    def __str__(self):
        if self.msg is not None:
            return self.msg
        return "too few arguments"
