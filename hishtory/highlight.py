"""Match highlighting, color profile choice and query ordering for the search view."""

from __future__ import annotations

import enum
import re
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable

_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)

PENDING_QUERY_DELAY = 1.0
"""Seconds a dispatched query may run before the view reports it as pending."""


class ColorProfile(enum.Enum):
    """Color support assumed for the terminal."""

    TRUE_COLOR = "truecolor"
    ANSI256 = "ansi256"
    ANSI = "ansi"
    ASCII = "ascii"


_PROFILE_CODES = {
    1: ColorProfile.TRUE_COLOR,
    2: ColorProfile.ANSI256,
    3: ColorProfile.ANSI,
    4: ColorProfile.ASCII,
}


def color_profile_from_env(
    value: str | None, is_default_scheme: bool, is_test: bool
) -> ColorProfile:
    """Pick the color profile from the shell-provided profile code.

    The default color scheme and test runs always use plain ANSI. Otherwise
    ``value`` is a code (1 true color, 2 ANSI 256, 3 ANSI, 4 ASCII); a
    missing, unknown or unparsable code falls back to ANSI 256.
    """
    if is_default_scheme or is_test:
        return ColorProfile.ANSI
    if not value:
        return ColorProfile.ANSI256
    code = int(value) if _INTEGER_RE.fullmatch(value) else 0
    return _PROFILE_CODES.get(code, ColorProfile.ANSI256)


@dataclass(frozen=True)
class Chunk:
    """A piece of a table cell and how it is rendered.

    ``is_left_most`` and ``is_right_most`` say whether the cell padding goes
    on that side of the chunk.
    """

    text: str
    is_match: bool
    is_left_most: bool
    is_right_most: bool


def _compile(pattern: str | re.Pattern[str] | None) -> re.Pattern[str] | None:
    if pattern is None:
        return None
    if isinstance(pattern, re.Pattern):
        return pattern
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error:
        return None


def split_highlight_chunks(value: str, pattern: str | re.Pattern[str] | None) -> list[Chunk]:
    """Split a cell into chunks, marking those matched by ``pattern``.

    An empty or missing pattern, or one that fails to compile, highlights
    nothing and yields the whole value as one chunk.
    """
    regex = _compile(pattern)
    spans = [m.span() for m in regex.finditer(value)] if regex is not None else []
    if not spans:
        return [Chunk(value, False, True, True)]

    chunks: list[Chunk] = []
    last = 0
    for start, end in spans:
        before = value[last:start]
        matched = value[start:end]
        if before:
            chunks.append(Chunk(before, False, last == 0, last + 1 == len(value)))
        if matched:
            chunks.append(Chunk(matched, True, start == 0, end == len(value)))
        last = end
    if last != len(value):
        chunks.append(Chunk(value[last:], False, False, True))
    return chunks


def dedupe_commands(commands: Iterable[str | None]) -> list[str]:
    """Keep the first occurrence of each command, ignoring surrounding whitespace.

    Missing entries are dropped.
    """
    seen: set[str] = set()
    kept: list[str] = []
    for command in commands:
        if command is None:
            continue
        key = command.strip()
        if key in seen:
            continue
        seen.add(key)
        kept.append(command)
    return kept


@dataclass
class QueryTracker:
    """Monotonic query ids so that stale results never replace newer ones.

    Typing ``l`` then ``s`` dispatches two queries; results for ``l`` that
    arrive after those for ``ls`` are rejected by :meth:`accept`.
    """

    clock: Callable[[], float] = time.monotonic
    last_dispatched_id: int = 0
    last_dispatched_at: float | None = None
    last_processed_id: int = -1
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def allocate(self) -> int:
        """Reserve the id for a newly dispatched query."""
        with self._lock:
            self.last_dispatched_id += 1
            self.last_dispatched_at = self.clock()
            return self.last_dispatched_id

    def accept(self, query_id: int) -> bool:
        """Record finished results; False if newer results were already taken."""
        with self._lock:
            if query_id > self.last_processed_id:
                self.last_processed_id = query_id
                return True
            return False

    def is_pending(self, now: float | None = None) -> bool:
        """Whether the newest query has been running for over a second."""
        with self._lock:
            if self.last_processed_id >= self.last_dispatched_id:
                return False
            if self.last_dispatched_at is None:
                return False
            current = self.clock() if now is None else now
            return current - self.last_dispatched_at > PENDING_QUERY_DELAY