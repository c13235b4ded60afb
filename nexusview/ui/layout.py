from __future__ import annotations

from bisect import bisect_right
from typing import Dict, List, Tuple

from nexusview.ui.constants import (
    CHARACTER_GAP,
    EMPTY_STATE_HEIGHT,
    HEADER_SPACING,
    ROW_SPACING,
    SECTION_SPACING,
    TOP_PADDING,
)

__all__ = ["LayoutCursor", "INCREMENTS"]

INCREMENTS: Dict[str, int] = {
    "row": ROW_SPACING,
    "subrow": ROW_SPACING,
    "header": HEADER_SPACING,
    "gap": CHARACTER_GAP,
    "section": SECTION_SPACING,
    "empty": EMPTY_STATE_HEIGHT,
}


class LayoutCursor:
    """
    Vertical offset accumulator owned by one render pass.

    - offset is the y where the next node goes (content coordinates).
    - marks[i] == y at which emitted node i was placed.
    - steps is the ordered list of increments applied; two passes over the
      same input produce identical steps.
    """

    __slots__ = ("top", "offset", "marks", "steps")

    def __init__(self, top: int = TOP_PADDING) -> None:
        self.top: int = top
        self.offset: int = top
        self.marks: List[int] = []
        self.steps: List[Tuple[str, int]] = []

    def reset(self) -> None:
        self.offset = self.top
        self.marks = []
        self.steps = []

    def advance(self, amount: int, kind: str = "") -> int:
        """Move down by `amount` and return the new offset. Never moves up."""
        if amount < 0:
            raise ValueError(f"Layout cursor cannot move up ({amount})")
        self.offset += amount
        self.steps.append((kind, amount))
        return self.offset

    def advance_for(self, kind: str) -> int:
        return self.advance(INCREMENTS[kind], kind)

    def mark(self) -> int:
        """Record the current offset as the top of the next emitted node; returns its index."""
        self.marks.append(self.offset)
        return len(self.marks) - 1

    def find_node_at_y(self, y: int) -> int:
        """
        Index of the emitted node whose top is the last one at or above `y`.
        Returns -1 when nothing was emitted or `y` lies above the first node.
        """
        if not self.marks:
            return -1
        return bisect_right(self.marks, y) - 1

    def content_height(self) -> int:
        return self.offset
