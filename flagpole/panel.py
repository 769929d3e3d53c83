"""Rich rendering of the errors flagpole reports to the end-user."""

from typing import TYPE_CHECKING

from flagpole.exceptions import FlagpoleUsageError

if TYPE_CHECKING:
    from rich.console import RenderableType

FATAL_PREFIX = "Fatal flagpole usage error in script: "


def ErrorPanel(error: BaseException, usage: str | None = None) -> "RenderableType":  # noqa: N802
    """Render ``error`` in a red rounded panel, optionally preceded by the usage line.

    A :class:`~flagpole.FlagpoleUsageError` is a mistake in the program, not in the command line;
    it is titled "Fatal Error" and its message is prefixed accordingly.

    .. code-block:: text

        usage: prog [-h] text
        ╭─ Error ──────────────────────────────────╮
        │ too few arguments                        │
        ╰──────────────────────────────────────────╯

    Parameters
    ----------
    error: BaseException
        Error to display.
    usage: str | None
        Usage line printed above the panel.
    """
    from rich import box
    from rich.console import Group
    from rich.panel import Panel
    from rich.text import Text

    if isinstance(error, FlagpoleUsageError):
        title, message = "Fatal Error", FATAL_PREFIX + str(error)
    else:
        title, message = "Error", str(error)

    panel = Panel(Text(message, "default"), title=title, style="red", box=box.ROUNDED, expand=True, title_align="left")
    if usage is None:
        return panel
    return Group(Text(usage), panel)
