"""Token-consuming state machine that binds command-line tokens to arguments."""

import logging
from collections import deque
from collections.abc import Iterable

from flagpole.argument import Argument, ArgumentCollection, ArgumentStyle
from flagpole.exceptions import ParameterExpectedError, TooFewArgumentsError, UnexpectedPositionalError
from flagpole.labels import is_flag_style
from flagpole.result import ParsingResult
from flagpole.value import Kind, Value

logger = logging.getLogger(__name__)

_TRUE = Value(Kind.BOOL, True)
_FALSE = Value(Kind.BOOL, False)


class ParsingState:
    """State of a single :func:`parse_tokens` call.

    Tokens are processed left to right in a single pass.
    The only lookahead is the value token consumed right after an optional argument's label.

    Parameters
    ----------
    arguments: Iterable[Argument]
        Expected arguments.
    tokens: Iterable[str]
        Already split command-line tokens, without the program name.

    Raises
    ------
    DeclarationError
        If ``arguments`` contains a help argument.
    DuplicateLabelError
        If two of ``arguments`` share a label.
    """

    def __init__(self, arguments: Iterable[Argument], tokens: Iterable[str]):
        arguments = ArgumentCollection(arguments)
        arguments.validate()

        self._lookup: dict[str, Argument] = {
            label: argument for argument in arguments.flag_like for label in argument.all_labels
        }
        # dicts as insertion-ordered sets.
        self._unseen_flags = dict.fromkeys(arguments.filter_by(ArgumentStyle.FLAG))
        self._unseen_optionals = dict.fromkeys(arguments.filter_by(ArgumentStyle.OPTIONAL))
        self._unbound_positionals = deque(arguments.positionals)
        self._tokens = iter(tokens)

        self.parsed: dict[str, Value] = {}
        """Label to value, for every label of every argument seen so far."""

    def run(self) -> dict[str, Value]:
        """Consume every token, then resolve the arguments that were never seen.

        Raises
        ------
        FlagpoleError
            Any of the parse-time errors.
        """
        for token in self._tokens:
            self._parse_token(token)

        if self._unbound_positionals:
            raise TooFewArgumentsError()

        for argument in self._unseen_flags:
            self._record(argument, _FALSE)

        for argument in self._unseen_optionals:
            if argument.default.has_value:
                assert argument.default.value is not None
                self._record(argument, argument.default.value)

        return self.parsed

    def _record(self, argument: Argument, value: Value):
        for label in argument.all_labels:
            self.parsed[label] = value

    def _parse_token(self, token: str):
        try:
            argument = self._lookup[token]
        except KeyError:
            self._parse_positional(token)
            return

        self._unseen_flags.pop(argument, None)
        self._unseen_optionals.pop(argument, None)

        if argument.style.requires_trailing_value:
            value_token = next(self._tokens, None)
            # A value must never be mistaken for the next flag.
            if value_token is None or is_flag_style(value_token):
                raise ParameterExpectedError(argument=argument)
            value = argument.parse_value(value_token)
            logger.debug("Bound %r to optional argument %s.", value_token, argument.label)
        else:
            value = _TRUE
            logger.debug("Set flag %s.", argument.label)

        self._record(argument, value)

    def _parse_positional(self, token: str):
        try:
            argument = self._unbound_positionals.popleft()
        except IndexError:
            raise UnexpectedPositionalError(token=token) from None

        value = argument.parse_value(token)
        logger.debug("Bound %r to positional argument %s.", token, argument.label)
        self._record(argument, value)


def parse_tokens(arguments: Iterable[Argument], tokens: Iterable[str]) -> ParsingResult:
    """Parse ``tokens`` against the expected ``arguments``.

    This is the core of :meth:`.ArgumentParser.parse`; it never prints and never exits.

    .. code-block:: python

        >>> from flagpole import OptionalArgument, PositionalArgument, parse_tokens
        >>> result = parse_tokens([OptionalArgument("--num", int, default=1), PositionalArgument("text")], ["hello"])
        >>> result.value("num"), result.value("text")
        (1, 'hello')

    Parameters
    ----------
    arguments: Iterable[Argument]
        Expected arguments.
    tokens: Iterable[str]
        Already split command-line tokens, without the program name.

    Returns
    -------
    ParsingResult
        Every label of every resolved argument mapped to its value.

    Raises
    ------
    DeclarationError
        If ``arguments`` contains a help argument.
    DuplicateLabelError
        If two of ``arguments`` share a label.
    FlagpoleError
        If the tokens don't satisfy ``arguments``.
    """
    return ParsingResult(ParsingState(arguments, tokens).run())
