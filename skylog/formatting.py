"""Record formatting helpers.

A record is rendered as::

    [yyyyMMdd:HHmmss|identity] <LEVEL> message

followed by a single newline. The message is the template with ``{i}``
placeholders substituted from the positional arguments and control
characters escaped so a record never spans more than one physical line.
"""

from __future__ import annotations

import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from datetime import datetime

    from .levels import Level

TIMESTAMP_FORMAT: typ.Final[str] = "%Y%m%d:%H%M%S"

_PLACEHOLDER = re.compile(r"\{(0|[1-9][0-9]*)\}")

_ESCAPES: typ.Final[dict[int, str]] = str.maketrans(
    {
        "\n": "\\n",
        "\r": "\\r",
        "\t": "    ",
        "\b": "\\b",
        "\x1b": "\\e",
    }
)


def substitute(template: str, args: cabc.Sequence[object]) -> str:
    """Replace ``{i}`` in ``template`` with ``str(args[i])``.

    Substitution is a single pass, so text produced by an argument is never
    itself treated as a placeholder. Placeholders without a matching
    argument are left untouched.

    Examples
    --------
    >>> substitute("{0} and {1}", ["x", 7])
    'x and 7'
    >>> substitute("{5}", ["x"])
    '{5}'

    """
    if not args:
        return template

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(args):
            return match.group(0)
        return str(args[index])

    return _PLACEHOLDER.sub(_replace, template)


def escape_controls(message: str) -> str:
    """Escape newline, carriage return, tab, backspace and ESC."""
    return message.translate(_ESCAPES)


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def format_record(
    level: Level,
    template: str,
    args: cabc.Sequence[object],
    *,
    timestamp: datetime,
    identity: str,
) -> str:
    """Render a complete record line, including the trailing newline."""
    message = escape_controls(substitute(template, args))
    return f"[{format_timestamp(timestamp)}|{identity}] <{level.name}> {message}\n"


__all__ = [
    "TIMESTAMP_FORMAT",
    "escape_controls",
    "format_record",
    "format_timestamp",
    "substitute",
]
