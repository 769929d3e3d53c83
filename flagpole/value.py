from enum import Enum
from typing import Union

from flagpole.utils import frozen

PythonValue = Union[int, float, bool, str]


class Kind(Enum):
    """Closed set of value types an argument can convert its token into."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STR = "str"

    @property
    def is_text(self) -> bool:
        return self is Kind.STR

    @classmethod
    def from_type(cls, type_: "type | Kind") -> "Kind":
        """Resolve a python type (``int``, ``float``, ``bool``, ``str``) into a :class:`Kind`.

        Raises
        ------
        TypeError
            If ``type_`` is not one of the supported types.
        """
        if isinstance(type_, Kind):
            return type_
        try:
            return _KINDS_BY_TYPE[type_]
        except (KeyError, TypeError):
            raise TypeError(f"Unsupported argument type {type_!r}; must be one of int, float, bool or str.") from None


_KINDS_BY_TYPE: dict[type, Kind] = {
    int: Kind.INT,
    float: Kind.FLOAT,
    bool: Kind.BOOL,
    str: Kind.STR,
}


@frozen
class Value:
    """A converted value tagged with its :class:`Kind`.

    Two values are only equal when both their kind and their payload are equal,
    so ``Value(Kind.INT, 1)`` never equals ``Value(Kind.BOOL, True)``.
    """

    kind: Kind
    value: PythonValue

    def to_text(self) -> str:
        """Render the payload as text that converts back into an equal :class:`Value`."""
        if self.kind is Kind.BOOL:
            return "true" if self.value else "false"
        return str(self.value)
