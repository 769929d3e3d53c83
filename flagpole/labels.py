"""Classification and normalization of argument labels and command-line tokens.

Every function here is a pure string predicate or transform.
"""

LONG_FLAG_PREFIX = "--"
SHORT_FLAG_PREFIX = "-"


def is_long_flag_style(s: str) -> bool:
    """If ``s`` starts with ``--``."""
    return s.startswith(LONG_FLAG_PREFIX)


def is_short_flag_style(s: str) -> bool:
    """If ``s`` starts with a single ``-``."""
    return s.startswith(SHORT_FLAG_PREFIX) and not is_long_flag_style(s)


def is_flag_style(s: str) -> bool:
    return is_long_flag_style(s) or is_short_flag_style(s)


def add_long_flag_prefix(s: str) -> str:
    """Prepend ``--`` unless ``s`` is already flag-styled (long or short)."""
    if is_flag_style(s):
        return s
    return LONG_FLAG_PREFIX + s


def add_short_flag_prefix(s: str) -> str:
    """Prepend ``-`` unless ``s`` is already flag-styled (long or short)."""
    if is_flag_style(s):
        return s
    return SHORT_FLAG_PREFIX + s


def remove_flag_prefix(s: str) -> str:
    """Strip exactly one leading ``--`` or ``-``."""
    if is_long_flag_style(s):
        return s[len(LONG_FLAG_PREFIX) :]
    if is_short_flag_style(s):
        return s[len(SHORT_FLAG_PREFIX) :]
    return s


def placeholder_argument_string(s: str) -> str:
    """Transform a label into the placeholder displayed for its value.

    .. code-block:: python

        >>> placeholder_argument_string("--output-file")
        'OUTPUT_FILE'
    """
    return remove_flag_prefix(s).replace("-", "_").upper()


def is_valid_argument_name(s: str) -> bool:
    """If ``s`` is acceptable as an argument label.

    After removing the flag prefix (if any), the name must:

    * be non-empty and contain no whitespace.
    * start with a letter or ``_``.
    * contain only alphanumeric characters, ``_`` and ``-``.
    """
    name = remove_flag_prefix(s)
    if not name:
        return False
    if any(c.isspace() for c in name):
        return False
    if not (name[0].isalpha() or name[0] == "_"):
        return False
    return all(c.isalnum() or c in "_-" for c in name)
