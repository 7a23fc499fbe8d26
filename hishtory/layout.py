"""Sizing of the search results table for a given terminal."""

from __future__ import annotations

from typing import Sequence

DEFAULT_TABLE_HEIGHT = 20
"""Rows shown when not rendering full screen."""

FALLBACK_FULL_SCREEN_HEIGHT = 30
"""Table height guessed when the terminal size cannot be read."""

COMPACT_HEIGHT_THRESHOLD = 25
EXTRA_COMPACT_HEIGHT_THRESHOLD = 15

_BASE_TUI_SIZE = 12
_COMPACT_SAVINGS = 2
_EXTRA_COMPACT_SAVINGS = 3
_ENTRIES_PER_ROW = 5
_GROWTH_SLACK = 5


def _display_len(text: str) -> int:
    return len(text.encode("utf-8"))


def calculate_column_widths(rows: Sequence[Sequence[str]], num_columns: int) -> list[int]:
    """The widest cell of each column, measured in UTF-8 bytes.

    Raises ValueError if a row has more cells than ``num_columns``.
    """
    widths = [0] * num_columns
    for row in rows:
        if len(row) > num_columns:
            raise ValueError(f"row has {len(row)} cells but only {num_columns} columns: {row!r}")
        for i, value in enumerate(row):
            widths[i] = max(widths[i], _display_len(value))
    return widths


def fit_column_widths(
    column_names: Sequence[str],
    rows: Sequence[Sequence[str]],
    reference_rows: Sequence[Sequence[str]],
    terminal_width: int,
) -> list[int]:
    """Choose a width for every column so the table fits the terminal.

    Each column starts as wide as its header and the cells in ``rows``. While
    there is room, columns grow one at a time up to five more than the widest
    cell in ``reference_rows`` (normally the results of an empty search). If
    the table is then wider than the terminal, the widest column is shrunk
    repeatedly until it fits. With no rows, a single row of blanks is assumed.
    """
    num_columns = len(column_names)
    if not rows or not rows[0]:
        rows = [[" "] * num_columns]

    widths = calculate_column_widths(rows, num_columns)
    total = (num_columns + 1) * 2  # table padding
    for i, name in enumerate(column_names):
        widths[i] = max(widths[i], _display_len(name))
        total += widths[i]

    maximum = calculate_column_widths(reference_rows, num_columns)

    while total < terminal_width - num_columns:
        previous_total = total
        for i in range(num_columns):
            if widths[i] < maximum[i] + _GROWTH_SLACK:
                widths[i] += 1
                total += 1
        if total == previous_total:
            break

    while num_columns and total > terminal_width:
        widest = max(range(num_columns), key=lambda i: (widths[i], -i))
        widths[widest] -= 1
        total -= 1

    return widths


def table_height(full_screen: bool, terminal_height: int | None) -> int:
    """Rows the table aims to show; ``terminal_height`` is None if unknown."""
    if not full_screen:
        return DEFAULT_TABLE_HEIGHT
    if terminal_height is None:
        return FALLBACK_FULL_SCREEN_HEIGHT
    return max(terminal_height - 15, DEFAULT_TABLE_HEIGHT)


def num_entries_needed(full_screen: bool, terminal_height: int | None) -> int:
    """How many entries to fetch, leaving room for ones filtered out later."""
    return table_height(full_screen, terminal_height) * _ENTRIES_PER_ROW


def is_compact_height(force_compact: bool, terminal_height: int | None) -> bool:
    """Whether to drop blank spacing lines; an unknown height counts as tall."""
    if force_compact:
        return True
    if terminal_height is None:
        return False
    return terminal_height < COMPACT_HEIGHT_THRESHOLD


def is_extra_compact_height(force_compact: bool, terminal_height: int | None) -> bool:
    """Whether to hide messages and help too; an unknown height counts as tall."""
    if force_compact:
        return True
    if terminal_height is None:
        return False
    return terminal_height < EXTRA_COMPACT_HEIGHT_THRESHOLD


def visible_table_height(
    full_screen: bool, terminal_height: int | None, force_compact: bool
) -> int:
    """Rows the table is given once the rest of the view has its space.

    Raises ValueError if the terminal height is unknown.
    """
    if terminal_height is None:
        raise ValueError("failed to get terminal size")
    tui_size = _BASE_TUI_SIZE
    if is_compact_height(force_compact, terminal_height):
        tui_size -= _COMPACT_SAVINGS
    if is_extra_compact_height(force_compact, terminal_height):
        tui_size -= _EXTRA_COMPACT_SAVINGS
    return min(table_height(full_screen, terminal_height), terminal_height - tui_size)