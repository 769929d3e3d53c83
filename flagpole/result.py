from collections.abc import Iterator, Mapping
from typing import Any, overload

from attrs import define, field

from flagpole.argument import Argument
from flagpole.exceptions import ResultTypeError
from flagpole.labels import add_long_flag_prefix, add_short_flag_prefix, is_flag_style
from flagpole.value import Kind, PythonValue, Value


@define(frozen=True, eq=False)
class ParsingResult(Mapping[str, Value]):
    """Read-only view of the values produced by a successful parse.

    As a :class:`~collections.abc.Mapping`, it maps each label exactly as declared
    (e.g. ``"--num"``, ``"-n"``, ``"text"``) to a tagged :class:`~flagpole.Value`.
    The accessor methods also accept labels without their flag prefix and return plain python values.

    .. code-block:: python

        result.value(num_argument)  # 3
        result.value("num")  # 3
        result.int_value("--num")  # 3
    """

    _values: dict[str, Value] = field(factory=dict, converter=dict, alias="values")

    def __getitem__(self, label: str) -> Value:
        return self._values[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self):
        return f"{type(self).__name__}({self._values!r})"

    def _resolve_label(self, label: str) -> str | None:
        if label in self._values:
            return label
        if is_flag_style(label):
            return None
        for candidate in (add_long_flag_prefix(label), add_short_flag_prefix(label)):
            if candidate in self._values:
                return candidate
        return None

    def tagged(self, label: str) -> Value | None:
        """The :class:`~flagpole.Value` stored under ``label``, with or without its flag prefix."""
        resolved = self._resolve_label(label)
        return None if resolved is None else self._values[resolved]

    def kind_of(self, label: str) -> Kind | None:
        """Kind of the value stored under ``label``; :obj:`None` if there is no value."""
        tagged = self.tagged(label)
        return None if tagged is None else tagged.kind

    @overload
    def value(self, key: Argument) -> Any: ...
    @overload
    def value(self, key: str, type: type | Kind | None = None) -> Any: ...
    def value(self, key, type=None) -> PythonValue | None:
        """Look up a parsed value.

        Parameters
        ----------
        key: Argument | str
            An :class:`~flagpole.Argument` or one of its labels.
            For an :class:`~flagpole.Argument`, a stored value of a different kind
            (e.g. another argument's label collision) yields :obj:`None`.
        type: type | Kind | None
            Only for string ``key``; the type the caller expects.

        Returns
        -------
        int | float | bool | str | None
            :obj:`None` if there is no value.

        Raises
        ------
        ResultTypeError
            If ``type`` is given and the stored value is of a different type.
            This is a programming error, not a command-line error.
        """
        if isinstance(key, Argument):
            if type is not None:
                raise TypeError("type can not be specified when looking up by Argument.")
            tagged = self._values.get(key.label)
            if tagged is None or tagged.kind is not key.kind:
                return None
            return tagged.value

        tagged = self.tagged(key)
        if tagged is None:
            return None
        if type is not None:
            requested = Kind.from_type(type)
            if tagged.kind is not requested:
                raise ResultTypeError(label=key, requested=requested, actual=tagged.kind)
        return tagged.value

    def bool_value(self, label: str) -> bool | None:
        return self.value(label, Kind.BOOL)

    def int_value(self, label: str) -> int | None:
        return self.value(label, Kind.INT)

    def float_value(self, label: str) -> float | None:
        return self.value(label, Kind.FLOAT)

    def str_value(self, label: str) -> str | None:
        return self.value(label, Kind.STR)

    def to_dict(self) -> dict[str, PythonValue]:
        """Plain ``{label: python_value}`` copy."""
        return {label: tagged.value for label, tagged in self._values.items()}
