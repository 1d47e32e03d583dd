# ffshell/common/strings/escaping.py
"""
Escaping for text that ends up inside ffmpeg filter graphs or concat lists.

ffmpeg parses a filter graph in two passes: first the graph (filters split on
',' and ';', link labels in '[...]'), then each filter's option string
(key=value pairs split on ':'). A literal value therefore has to survive both.
"""
from __future__ import annotations

from pathlib import Path

_OPTION_SPECIALS = ("\\", "'", ":")
_GRAPH_SPECIALS = ("\\", "'", "[", "]", ",", ";")


def _backslash(text: str, specials: tuple[str, ...]) -> str:
    # backslash must be first so we do not double-escape our own escapes
    out = text
    for ch in specials:
        out = out.replace(ch, "\\" + ch)
    return out


def escape_filter_option(value: str) -> str:
    """Escape a value for the option level (inside one filter's arguments)."""
    return _backslash(str(value), _OPTION_SPECIALS)


def escape_filter_graph(text: str) -> str:
    """Escape a filter description for the graph level."""
    return _backslash(str(text), _GRAPH_SPECIALS)


def escape_filter_value(value: str | Path) -> str:
    """
    Escape a literal (file name, style string) for direct use as a filter
    option value in -vf / -filter_complex. A ':' comes out as two
    backslashes and the colon, a quote as three backslashes and the quote.
    """
    return escape_filter_graph(escape_filter_option(str(value)))


def quote_concat_path(path: str | Path) -> str:
    """Single-quote a path for a concat demuxer list (`file '<path>'`)."""
    return "'" + str(path).replace("'", "'\\''") + "'"
