"""Positional message formatting and record rendering.

Templates use ``{0}``, ``{1}``, ... placeholders. Every placeholder must name
an existing argument and, unless the formatter is built with
``allow_unused=True``, every argument must be referenced by the template;
mismatches raise FormatError instead of producing a half-rendered string.
``{{`` and ``}}`` stand for literal braces.
"""
from __future__ import annotations

import re
import threading
from typing import Any, Optional, Set

from .errors import FormatError

_TOKEN = re.compile(r"\{\{|\}\}|\{(\d+)\}")

RECORD_TEMPLATE = "{0}: {1} ({2}:{3})"


class PositionalFormatter:
    """Reusable positional template.

    >>> PositionalFormatter("{0} of {1}").format(3, 4)
    '3 of 4'
    """

    def __init__(self, template: str, allow_unused: bool = False) -> None:
        self.template = template
        self.allow_unused = allow_unused

    def placeholders(self) -> Set[int]:
        return {int(m.group(1)) for m in _TOKEN.finditer(self.template) if m.group(1) is not None}

    def check(self, arg_count: int) -> None:
        """Raise FormatError unless the template fits ``arg_count`` arguments."""
        indices = self.placeholders()
        out_of_range = sorted(i for i in indices if i >= arg_count)
        if out_of_range:
            raise FormatError(
                f"placeholder(s) {out_of_range} out of range for {arg_count} argument(s) in {self.template!r}"
            )
        if not self.allow_unused:
            missing = sorted(set(range(arg_count)) - indices)
            if missing:
                raise FormatError(f"no placeholder for argument(s) {missing} in {self.template!r}")

    def format(self, *args: Any) -> str:
        values = [str(a) for a in args]
        used: Set[int] = set()

        def _sub(match: "re.Match[str]") -> str:
            token = match.group(0)
            if token == "{{":
                return "{"
            if token == "}}":
                return "}"
            index = int(match.group(1))
            if index >= len(values):
                raise FormatError(
                    f"placeholder {{{index}}} out of range for {len(values)} argument(s) in {self.template!r}"
                )
            used.add(index)
            return values[index]

        # re.sub never re-scans replacement text, so substituted values that
        # contain "{n}" stay literal.
        result = _TOKEN.sub(_sub, self.template)
        missing = sorted(set(range(len(values))) - used)
        if missing and not self.allow_unused:
            raise FormatError(f"no placeholder for argument(s) {missing} in {self.template!r}")
        return result


def format_positional(template: str, *args: Any) -> str:
    return PositionalFormatter(template).format(*args)


_RECORD = PositionalFormatter(RECORD_TEMPLATE)


def render_record(text: str, file: str, line: int, thread_id: Optional[int] = None) -> str:
    """Render ``"<thread-id>: <text> (<file>:<line>)"``.

    The thread id defaults to the calling thread's identifier; it only serves
    to tell concurrent callers apart in interleaved output.
    """
    if thread_id is None:
        thread_id = threading.get_ident()
    return _RECORD.format(thread_id, text, file, int(line))


__all__ = ["PositionalFormatter", "format_positional", "render_record", "RECORD_TEMPLATE"]
