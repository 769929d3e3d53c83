__version__ = "0.1.0"

__all__ = [
    "Argument",
    "ArgumentCollection",
    "ArgumentParser",
    "ArgumentStyle",
    "Default",
    "DefaultState",
    "DeclarationError",
    "DuplicateLabelError",
    "ErrorPanel",
    "FlagArgument",
    "FlagpoleError",
    "FlagpoleUsageError",
    "HelpArgument",
    "InvalidLabelError",
    "InvalidTypeError",
    "Kind",
    "NotInChoicesError",
    "OptionalArgument",
    "ParameterExpectedError",
    "ParsingResult",
    "PositionalArgument",
    "PositionalLabelIsFlagError",
    "ResultTypeError",
    "ShortLabelIsLongFlagError",
    "TooFewArgumentsError",
    "UNSET",
    "UnexpectedPositionalError",
    "Value",
    "convert",
    "parse_tokens",
    "run",
]

from flagpole._convert import convert
from flagpole._run import run
from flagpole.argument import (
    Argument,
    ArgumentCollection,
    ArgumentStyle,
    Default,
    DefaultState,
    FlagArgument,
    HelpArgument,
    OptionalArgument,
    PositionalArgument,
)
from flagpole.exceptions import (
    DeclarationError,
    DuplicateLabelError,
    FlagpoleError,
    FlagpoleUsageError,
    InvalidLabelError,
    InvalidTypeError,
    NotInChoicesError,
    ParameterExpectedError,
    PositionalLabelIsFlagError,
    ResultTypeError,
    ShortLabelIsLongFlagError,
    TooFewArgumentsError,
    UnexpectedPositionalError,
)
from flagpole.panel import ErrorPanel
from flagpole.parser import ArgumentParser
from flagpole.parsing import parse_tokens
from flagpole.result import ParsingResult
from flagpole.utils import UNSET
from flagpole.value import Kind, Value
