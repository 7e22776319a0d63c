"""
Sequence normalization.

Turns the collector's items into the final string. Runs of break markers
collapse to the largest weight in the run, the way adjacent block margins
collapse: a paragraph next to a div gives one blank line, not two.
"""

from __future__ import annotations

from collections.abc import Iterable

from .collect import Item


def normalize(items: Iterable[Item]) -> str:
    """Join items into text, replacing each marker run with max(run) newlines."""
    content = [item for item in items if item != ""]

    start, end = 0, len(content)
    while start < end and isinstance(content[start], int):
        start += 1
    while end > start and isinstance(content[end - 1], int):
        end -= 1

    parts: list[str] = []
    pending = 0
    for item in content[start:end]:
        if isinstance(item, int):
            pending = max(pending, item)
            continue
        if pending:
            parts.append("\n" * pending)
            pending = 0
        parts.append(item)
    return "".join(parts)
