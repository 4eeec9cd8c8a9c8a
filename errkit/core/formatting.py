from __future__ import annotations

from string import Formatter
from typing import Any


def _append(text: str, args: tuple[Any, ...]) -> str:
    return f"{text} ({', '.join(str(a) for a in args)})"


def _positional_fields(fmt: str) -> int:
    """Number of positional arguments the replacement fields of fmt consume."""

    auto = 0
    highest = -1
    for _, field, _, _ in Formatter().parse(fmt):
        if field is None:
            continue
        name = field.split(".", 1)[0].split("[", 1)[0]
        if name == "":
            auto += 1
        elif name.isdigit():
            highest = max(highest, int(name))
    return max(auto, highest + 1)


def interpolate(fmt: str, args: tuple[Any, ...]) -> str:
    """Fill ``{}`` placeholders in fmt with args.

    Never raises and never drops a value: a format that does not fit its
    arguments is kept as literal text with the arguments appended in
    parentheses, and arguments without a placeholder are appended the same
    way.
    """

    if not args:
        return fmt
    try:
        used = _positional_fields(fmt)
        text = fmt.format(*args)
    except (IndexError, KeyError, ValueError, AttributeError, TypeError):
        return _append(fmt, args)
    if used < len(args):
        return _append(text, args[used:])
    return text
