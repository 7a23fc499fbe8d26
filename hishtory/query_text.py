"""Text handling for the search box and the selected command."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Iterable

_ESCAPE_CODE_RE = re.compile(r"\d\d;rgb:[0-9a-f]{4}/[0-9a-f]{4}/[0-9a-f]{4}", re.ASCII)

_SHORT_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def calculate_word_boundaries(text: str) -> list[int]:
    """Positions the cursor stops at when jumping by word.

    Spaces and dashes separate words; a run of separators counts once.
    """
    boundaries = [0]
    prev_was_breaking = False
    for idx, char in enumerate(text):
        if char in " -":
            if not prev_was_breaking:
                boundaries.append(idx)
            prev_was_breaking = True
        else:
            prev_was_breaking = False
    if not prev_was_breaking:
        boundaries.append(len(text))
    return boundaries


def sanitize_escape_codes(text: str) -> str:
    """Remove terminal color-query replies that leak into the search box."""
    return _ESCAPE_CODE_RE.sub("", text)


def _quote(text: str) -> str:
    out = ['"']
    for char in text:
        if char in _SHORT_ESCAPES:
            out.append(_SHORT_ESCAPES[char])
        elif char.isprintable() or char == " ":
            out.append(char)
        else:
            code = ord(char)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code < 0x10000:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


def command_escaper(cmd: str) -> str:
    """Quote a command for table display if it holds newlines or tabs."""
    if "\n" not in cmd and "\t" not in cmd:
        return cmd
    return _quote(cmd)


def _json_string(text: str) -> str:
    encoded = json.dumps(text, ensure_ascii=False)
    for raw, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        encoded = encoded.replace(raw, escaped)
    return encoded


def build_initial_query_with_search_escaping(chunks: Iterable[str]) -> str:
    """Join query words, quoting those that start with a dash.

    A leading dash would otherwise be read as a negated search term.
    """
    return " ".join(_json_string(c) if c.startswith("-") else c for c in chunks)


def split_query_array(chunks: Iterable[str]) -> list[str]:
    """Split every chunk on single spaces and flatten the result."""
    return [word for chunk in chunks for word in chunk.split(" ")]


def build_selected_command(
    command: str,
    working_directory: str,
    change_dir: bool,
    home: str | None = None,
) -> str:
    """The command line to hand back to the shell for a selected entry.

    With ``change_dir`` the command is prefixed with a ``cd`` into the
    directory it was run in, expanding a leading ``~/`` to ``home`` (or the
    current user's home directory when ``home`` is not given).
    """
    if not change_dir:
        return command
    directory = working_directory
    if directory.startswith("~/"):
        if home is None:
            try:
                home = str(Path.home())
            except RuntimeError:
                home = None
        if home is not None:
            directory = os.path.normpath(os.path.join(home, directory[2:]))
    return f'cd "{directory}" && {command}'