import re
from collections.abc import Callable

from flagpole.value import Kind, PythonValue, Value

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

_TRUE_STRINGS = frozenset({"1", "true", "TRUE"})
_FALSE_STRINGS = frozenset({"0", "false", "FALSE"})


def _check_int64(value: int) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{value} does not fit in a 64-bit signed integer.")
    return value


def _int(s: str) -> int:
    # python's int() also accepts whitespace and "_" separators.
    if not _INT_PATTERN.fullmatch(s):
        raise ValueError
    return _check_int64(int(s))


def _float(s: str) -> float:
    # python's float() also accepts non-ASCII digits.
    if not s.isascii() or s != s.strip() or "_" in s:
        raise ValueError
    return float(s)


def _bool(s: str) -> bool:
    # Case-sensitive on purpose; "True" and "yes" are rejected.
    if s in _TRUE_STRINGS:
        return True
    elif s in _FALSE_STRINGS:
        return False
    else:
        raise ValueError


def _str(s: str) -> str:
    return s


_converters: dict[Kind, Callable[[str], PythonValue]] = {
    Kind.INT: _int,
    Kind.FLOAT: _float,
    Kind.BOOL: _bool,
    Kind.STR: _str,
}


def convert(kind: Kind, token: str) -> Value | None:
    """Convert a single CLI token into a :class:`Value` of the requested kind.

    Parameters
    ----------
    kind: Kind
        Kind to convert into.
    token: str
        Raw command-line token.

    Returns
    -------
    Value | None
        The converted value, or :obj:`None` if ``token`` is not a valid ``kind``.
        This function never raises on bad input.
    """
    try:
        return Value(kind, _converters[kind](token))
    except (ValueError, OverflowError):
        return None


def to_value(kind: Kind, obj: PythonValue | Value) -> Value:
    """Wrap a python object supplied at declaration time (defaults, choices) into a :class:`Value`.

    Raises
    ------
    TypeError
        If ``obj`` is not of ``kind``.
        An :obj:`int` is accepted for :attr:`Kind.FLOAT`; a :obj:`bool` is only accepted for :attr:`Kind.BOOL`.
    ValueError
        If an integer does not fit in 64 bits.
    """
    if isinstance(obj, Value):
        if obj.kind is not kind:
            raise TypeError(f"Expected a {kind.value} value, got a {obj.kind.value} value.")
        return obj

    if kind is Kind.BOOL:
        if isinstance(obj, bool):
            return Value(kind, obj)
    elif kind is Kind.INT:
        if isinstance(obj, int) and not isinstance(obj, bool):
            return Value(kind, _check_int64(obj))
    elif kind is Kind.FLOAT:
        if isinstance(obj, int | float) and not isinstance(obj, bool):
            return Value(kind, float(obj))
    elif isinstance(obj, str):
        return Value(kind, obj)

    raise TypeError(f"Expected a {kind.value} value, got {obj!r}.")
