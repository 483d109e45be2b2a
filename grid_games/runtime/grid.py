"""Mutable display grid owned by the active session."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple


class GridModel:
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive: {width}x{height}")
        self.width = width
        self.height = height
        self._cells: Dict[Tuple[int, int], str] = {}
        self.footer = ""

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Square ({x}, {y}) is outside the {self.width}x{self.height} grid")

    def set_square(self, x: int, y: int, text: str) -> None:
        self._check_bounds(x, y)
        self._cells[(x, y)] = text

    def get_square(self, x: int, y: int) -> Optional[str]:
        """Return the cell text, or None if nothing has been painted there yet."""
        self._check_bounds(x, y)
        return self._cells.get((x, y))

    def set_footer_text(self, text: str) -> None:
        self.footer = text

    def unpainted(self) -> List[Tuple[int, int]]:
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) not in self._cells
        ]

    def rows(self) -> List[List[str]]:
        return [
            [self._cells.get((x, y), "") for x in range(self.width)]
            for y in range(self.height)
        ]
