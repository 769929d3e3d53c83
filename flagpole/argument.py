"""Argument declarations and their collection."""

from collections.abc import Iterable
from enum import Enum
from typing import Any

from attrs import define, field

from flagpole._convert import convert, to_value
from flagpole.exceptions import (
    DeclarationError,
    DuplicateLabelError,
    InvalidLabelError,
    InvalidTypeError,
    NotInChoicesError,
    PositionalLabelIsFlagError,
    ShortLabelIsLongFlagError,
)
from flagpole.labels import (
    add_long_flag_prefix,
    add_short_flag_prefix,
    is_flag_style,
    is_long_flag_style,
    is_valid_argument_name,
    remove_flag_prefix,
)
from flagpole.utils import UNSET, frozen, optional_to_tuple_converter
from flagpole.value import Kind, PythonValue, Value

__all__ = [
    "Argument",
    "ArgumentCollection",
    "ArgumentStyle",
    "Default",
    "DefaultState",
    "FlagArgument",
    "HelpArgument",
    "OptionalArgument",
    "PositionalArgument",
]


class ArgumentStyle(Enum):
    """How an argument is identified on the command line."""

    POSITIONAL = "positional"
    """Matched by position among the non-flag tokens, e.g. ``file``."""

    OPTIONAL = "optional"
    """Flag-like label followed by a value, e.g. ``--number 3``."""

    FLAG = "flag"
    """Flag-like label with no value, e.g. ``--quiet``."""

    HELP = "help"
    """Flag-like label that requests the help page."""

    @property
    def has_flag_like_label(self) -> bool:
        return self is not ArgumentStyle.POSITIONAL

    @property
    def requires_trailing_value(self) -> bool:
        """If the label must be followed by a value token."""
        return self is ArgumentStyle.OPTIONAL

    @property
    def requires_value(self) -> bool:
        """If a value has to be supplied at all."""
        return self in (ArgumentStyle.POSITIONAL, ArgumentStyle.OPTIONAL)


class DefaultState(Enum):
    NOT_DECLARED = "not declared"
    ABSENT = "absent"
    VALUE = "value"


def _default_value_validator(instance, attribute, value):
    if (instance.state is DefaultState.VALUE) != (value is not None):
        raise ValueError(f"A {instance.state.value} default can not carry the value {value!r}.")


@frozen
class Default:
    """Default of an argument that doesn't show up on the command line.

    Distinguishes "no default was declared" from "the declared default is the absence of a value".
    """

    state: DefaultState
    value: Value | None = field(default=None, validator=_default_value_validator)

    @classmethod
    def of(cls, value: Value) -> "Default":
        return cls(DefaultState.VALUE, value)

    @property
    def has_value(self) -> bool:
        return self.state is DefaultState.VALUE


NO_DEFAULT = Default(DefaultState.NOT_DECLARED)
ABSENT_DEFAULT = Default(DefaultState.ABSENT)
_FALSE_DEFAULT = Default.of(Value(Kind.BOOL, False))


@define(frozen=True, eq=False)
class Argument:
    """The immutable description of one argument expected on the command line.

    Use :func:`PositionalArgument`, :func:`OptionalArgument`, :func:`FlagArgument` or
    :func:`HelpArgument` to create one; they normalize labels before construction.

    Two arguments are equal if they share style, kind, labels and help text;
    defaults and choices are not considered.
    """

    label: str
    """
    Canonical label.
    Bare name for positional arguments, flag-prefixed (usually ``--``) for every other style.
    """

    style: ArgumentStyle

    kind: Kind = Kind.STR
    """Kind of value a token is converted into."""

    short_label: str | None = field(default=None, kw_only=True)
    """Short alias, e.g. ``-n``."""

    default: Default = field(default=NO_DEFAULT, kw_only=True)

    choices: tuple[Value, ...] | None = field(default=None, kw_only=True)
    """If set, converted values must equal one of these."""

    help: str | None = field(default=None, kw_only=True)

    def __attrs_post_init__(self):
        if self.style is ArgumentStyle.POSITIONAL:
            if is_flag_style(self.label):
                raise PositionalLabelIsFlagError(label=self.label)
            if self.short_label is not None:
                raise DeclarationError(f"positional argument {self.label!r} can not have a short label.")
        elif not is_flag_style(self.label):
            raise DeclarationError(f"{self.style.value} argument label {self.label!r} must be flag-styled.")

        if self.short_label is not None and is_long_flag_style(self.short_label):
            raise ShortLabelIsLongFlagError(short_label=self.short_label)

        for label in self.all_labels:
            if not is_valid_argument_name(label):
                raise InvalidLabelError(style=self.style, labels=self.all_labels, invalid_label=label)

        if self.choices is not None:
            if not self.choices:
                raise DeclarationError(f"argument {self.label!r} declares an empty list of choices.")
            for choice in self.choices:
                if choice.kind is not self.kind:
                    raise TypeError(f"choice {choice!r} of argument {self.label!r} is not a {self.kind.value}.")

        if self.default.has_value:
            assert self.default.value is not None
            if self.default.value.kind is not self.kind:
                raise TypeError(f"default {self.default.value!r} of argument {self.label!r} is not a {self.kind.value}.")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Argument):
            return NotImplemented
        return (
            self.kind is other.kind
            and frozenset(self.all_labels) == frozenset(other.all_labels)
            and self.help == other.help
            and self.style is other.style
        )

    def __hash__(self) -> int:
        return hash(frozenset(self.all_labels))

    @property
    def all_labels(self) -> tuple[str, ...]:
        if self.short_label is None:
            return (self.label,)
        return (self.label, self.short_label)

    @property
    def compact_label(self) -> str:
        """The short label if there is one, otherwise the label."""
        return self.short_label or self.label

    @property
    def name(self) -> str:
        """Label without its flag prefix."""
        return remove_flag_prefix(self.label)

    @property
    def is_optional(self) -> bool:
        return self.style is not ArgumentStyle.POSITIONAL

    def parse_value(self, token: str) -> Value:
        """Convert ``token`` into a value for this argument.

        Raises
        ------
        InvalidTypeError
            If ``token`` can't be converted into :attr:`kind`.
        NotInChoicesError
            If the converted value isn't one of :attr:`choices`.
        """
        value = convert(self.kind, token)
        if value is None:
            raise InvalidTypeError(argument=self, token=token)
        if self.choices is not None and value not in self.choices:
            raise NotInChoicesError(argument=self, choices=self.choices, token=token)
        return value


def _to_default(kind: Kind, default: Any) -> Default:
    if default is UNSET:
        return NO_DEFAULT
    elif default is None:
        return ABSENT_DEFAULT
    else:
        return Default.of(to_value(kind, default))


def _to_choices(kind: Kind, choices: None | PythonValue | Iterable[PythonValue]) -> tuple[Value, ...] | None:
    choices = optional_to_tuple_converter(choices)
    if choices is None:
        return None
    return tuple(to_value(kind, x) for x in choices)


def PositionalArgument(  # noqa: N802
    label: str,
    type: type | Kind = str,
    *,
    default: Any = UNSET,
    choices: None | Iterable[PythonValue] = None,
    help: str | None = None,
) -> Argument:
    """Declare a positional argument.

    The first positional argument binds to the first bare token, the second to the second, and so on.

    .. code-block:: python

        PositionalArgument("count", int, help="How many times.")

    Parameters
    ----------
    label: str
        Name of the argument. Can not start with ``-`` or ``--``.
    type: type | Kind
        One of ``str`` (default), ``int``, ``float``, ``bool``.
    default: Any
        Stored on the declaration; a missing positional argument is still an error.
    choices: Iterable | None
        If provided, the converted token must be one of these values.
    help: str | None
        Description displayed on the help page.

    Raises
    ------
    PositionalLabelIsFlagError
        If ``label`` is flag-styled.
    InvalidLabelError
        If ``label`` is not a valid argument name.
    """
    if is_flag_style(label):
        raise PositionalLabelIsFlagError(label=label)
    kind = Kind.from_type(type)
    return Argument(
        remove_flag_prefix(label),
        ArgumentStyle.POSITIONAL,
        kind,
        default=_to_default(kind, default),
        choices=_to_choices(kind, choices),
        help=help,
    )


def OptionalArgument(  # noqa: N802
    label: str,
    type: type | Kind = str,
    *,
    short_label: str | None = None,
    default: Any = UNSET,
    choices: None | Iterable[PythonValue] = None,
    help: str | None = None,
) -> Argument:
    """Declare an optional argument, i.e. a flag-like label followed by a value: ``--speed 10``.

    Parameters
    ----------
    label: str
        Long label. ``--`` is prepended if no flag prefix is present.
    type: type | Kind
        One of ``str`` (default), ``int``, ``float``, ``bool``.
    short_label: str | None
        Short label. ``-`` is prepended if no flag prefix is present.
    default: Any
        Value used when the argument is not on the command line.
        If omitted (or :obj:`None`), the argument is absent from the :class:`~flagpole.ParsingResult`.
    choices: Iterable | None
        If provided, the converted value must be one of these.
    help: str | None
        Description displayed on the help page.
    """
    kind = Kind.from_type(type)
    return Argument(
        add_long_flag_prefix(label),
        ArgumentStyle.OPTIONAL,
        kind,
        short_label=None if short_label is None else add_short_flag_prefix(short_label),
        default=_to_default(kind, default),
        choices=_to_choices(kind, choices),
        help=help,
    )


def FlagArgument(  # noqa: N802
    label: str,
    *,
    short_label: str | None = None,
    help: str | None = None,
) -> Argument:
    """Declare a boolean flag: ``True`` when present, ``False`` otherwise."""
    return Argument(
        add_long_flag_prefix(label),
        ArgumentStyle.FLAG,
        Kind.BOOL,
        short_label=None if short_label is None else add_short_flag_prefix(short_label),
        default=_FALSE_DEFAULT,
        help=help,
    )


def HelpArgument(  # noqa: N802
    label: str = "--help",
    *,
    short_label: str | None = "-h",
    help: str = "show this help message and exit",
) -> Argument:
    """Declare the argument that requests the help page.

    It is only recognized as the first token; see :meth:`~flagpole.ArgumentParser.parse`.
    """
    return Argument(
        add_long_flag_prefix(label),
        ArgumentStyle.HELP,
        Kind.BOOL,
        short_label=None if short_label is None else add_short_flag_prefix(short_label),
        default=_FALSE_DEFAULT,
        help=help,
    )


class ArgumentCollection(list[Argument]):
    """A list-like container for :class:`Argument`."""

    def __init__(self, *args):
        super().__init__(*args)

    def copy(self) -> "ArgumentCollection":
        """Returns a shallow copy of the :class:`ArgumentCollection`."""
        return type(self)(self)

    def first_duplicate_label(self) -> str | None:
        """First label owned by more than one argument, in declaration order.

        Long and short labels are compared interchangeably.
        """
        seen = set()
        for argument in self:
            for label in argument.all_labels:
                if label in seen:
                    return label
                seen.add(label)
        return None

    def validate(self) -> None:
        """
        Raises
        ------
        DeclarationError
            If a help argument is part of the collection;
            it belongs in :attr:`.ArgumentParser.help_argument`.
        DuplicateLabelError
            If two arguments share a label.
        """
        for argument in self:
            if argument.style is ArgumentStyle.HELP:
                raise DeclarationError(
                    f"help argument {argument.label!r} can only be used as the parser's help_argument."
                )
        if (label := self.first_duplicate_label()) is not None:
            raise DuplicateLabelError(label=label)

    def filter_by(self, *styles: ArgumentStyle) -> "ArgumentCollection":
        """Arguments of any of the given styles, in declaration order."""
        return type(self)(x for x in self if x.style in styles)

    @property
    def positionals(self) -> "ArgumentCollection":
        return self.filter_by(ArgumentStyle.POSITIONAL)

    @property
    def flag_like(self) -> "ArgumentCollection":
        """Every argument identified by a ``-``/``--`` label."""
        return type(self)(x for x in self if x.style.has_flag_like_label)
