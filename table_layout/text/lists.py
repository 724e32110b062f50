"""Nested list state for the line breaker.

WHY: Ordered items are labelled "1. ", "2. ", and nested ordered lists
carry their parent's label ("2.1. "). Nesting depth also decides how far
each item is indented. The line breaker tracks both with one explicit
stack instead of a parent-linked node tree.

RULES:
- One ListLevel per open <ul>/<ol>; depth == stack size
- next_label() advances the innermost ordinal; it is only meaningful
  inside an ordered level
- A nested level's prefix is the parent's label for the item in progress
- close() on an empty stack is a no-op (unbalanced closers are tolerated)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass
class ListLevel:
    ordered: bool
    ordinal: int = 0
    prefix: str = ""

    @property
    def label(self) -> str:
        """Label of the item in progress ("" before the first item)."""
        if self.ordinal == 0:
            return self.prefix
        return "{}{}. ".format(self.prefix, self.ordinal)


class ListNumbering:
    """Stack of open list levels."""

    def __init__(self) -> None:
        self._levels: List[ListLevel] = []

    @property
    def depth(self) -> int:
        return len(self._levels)

    @property
    def ordered(self) -> bool:
        """True when the innermost open list is ordered."""
        return bool(self._levels) and self._levels[-1].ordered

    def open(self, ordered: bool) -> None:
        prefix = self._levels[-1].label.rstrip(" ") if self._levels else ""
        if prefix and not prefix.endswith("."):
            prefix += "."
        self._levels.append(ListLevel(ordered=ordered, prefix=prefix))

    def close(self) -> None:
        if self._levels:
            self._levels.pop()

    def next_label(self) -> str:
        """Advance the innermost ordinal and return its label."""
        if not self._levels:
            return ""
        level = self._levels[-1]
        level.ordinal += 1
        return level.label

    def current_label(self) -> str:
        return self._levels[-1].label if self._levels else ""
