"""Quote-aware splitter for the published customer sheet."""

from __future__ import annotations

QUOTE = '"'
LINE_BREAKS = ("\n", "\r")


def parse_csv(text: str, delimiter: str = ",") -> list[list[str]]:
    """Split CSV text into rows of string fields.

    Quotes toggle a quoted section and are never copied into the value, so a
    quoted field may hold the delimiter or a line break. Doubled quotes (``""``)
    are not treated as an escaped quote; the published feed never emits them.
    Blank lines are dropped and rows may differ in length.
    """

    rows: list[list[str]] = []
    row: list[str] = []
    value: list[str] = []
    inside_quotes = False

    for char in text:
        if char == QUOTE:
            inside_quotes = not inside_quotes
            continue
        if char == delimiter and not inside_quotes:
            row.append("".join(value))
            value = []
            continue
        if char in LINE_BREAKS and not inside_quotes:
            if value or row:
                row.append("".join(value))
                rows.append(row)
            row = []
            value = []
            continue
        value.append(char)

    if value or row:
        row.append("".join(value))
        rows.append(row)

    return rows
