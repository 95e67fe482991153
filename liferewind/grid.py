"""Game of Life grid with configurable boundary handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from liferewind.settings import BoundaryCondition

_OFFSETS = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


@dataclass
class Grid:
    """A rectangular grid of cells stored row by row."""

    width: int
    height: int
    cells: list[bool]
    boundary_condition: BoundaryCondition = BoundaryCondition.DEAD

    @classmethod
    def empty(
        cls,
        width: int,
        height: int,
        boundary_condition: BoundaryCondition = BoundaryCondition.DEAD,
    ) -> "Grid":
        """Create a grid with every cell dead."""
        return cls(width, height, [False] * (width * height), boundary_condition)

    @classmethod
    def from_cells(
        cls,
        cells: Sequence[Sequence[bool]],
        boundary_condition: BoundaryCondition = BoundaryCondition.DEAD,
    ) -> "Grid":
        """Create a grid from a list of rows."""
        if not cells:
            raise ValueError("Grid cannot be empty")
        width = len(cells[0])
        if width == 0:
            raise ValueError("Grid width cannot be zero")
        for i, row in enumerate(cells):
            if len(row) != width:
                raise ValueError(f"Row {i} has length {len(row)}, expected {width}")
        flat = [bool(cell) for row in cells for cell in row]
        return cls(width, len(cells), flat, boundary_condition)

    def index(self, row: int, col: int) -> int:
        """Flat index of a cell."""
        return row * self.width + col

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, row: int, col: int) -> bool:
        """Cell value; cells outside the grid are dead."""
        if self._in_bounds(row, col):
            return self.cells[self.index(row, col)]
        return False

    def set(self, row: int, col: int, value: bool) -> None:
        """Set a cell, raising IndexError outside the grid."""
        if not self._in_bounds(row, col):
            raise IndexError(
                f"Coordinates ({row}, {col}) out of bounds for "
                f"{self.height}x{self.width} grid"
            )
        self.cells[self.index(row, col)] = bool(value)

    def count_neighbors(self, row: int, col: int) -> int:
        """Number of living cells among the eight neighbours."""
        return sum(self._neighbor_alive(row + dr, col + dc) for dr, dc in _OFFSETS)

    def _neighbor_alive(self, row: int, col: int) -> bool:
        bc = self.boundary_condition
        if bc is BoundaryCondition.DEAD:
            return self.get(row, col)
        if bc is BoundaryCondition.WRAP:
            return self.cells[self.index(row % self.height, col % self.width)]
        return self.get(_mirror(row, self.height), _mirror(col, self.width))

    def living_cells(self) -> list[tuple[int, int]]:
        """Coordinates of living cells in row-major order."""
        return [divmod(i, self.width) for i, alive in enumerate(self.cells) if alive]

    def living_count(self) -> int:
        return sum(self.cells)

    def is_empty(self) -> bool:
        return not any(self.cells)

    def with_boundary_condition(self, boundary_condition: BoundaryCondition) -> "Grid":
        """Copy of this grid under another boundary condition."""
        return Grid(self.width, self.height, list(self.cells), boundary_condition)

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "cells": list(self.cells),
            "boundary_condition": self.boundary_condition.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Grid":
        try:
            width = int(data["width"])
            height = int(data["height"])
            cells: Iterable[Any] = data["cells"]
            boundary = BoundaryCondition(data["boundary_condition"])
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from None
        flat = [bool(cell) for cell in cells]
        if len(flat) != width * height:
            raise ValueError(
                f"Grid has {len(flat)} cells, expected {width * height}"
            )
        return cls(width, height, flat, boundary)

    def __str__(self) -> str:
        rows = (
            "".join("⬛" if alive else "⬜" for alive in self.cells[r * self.width:(r + 1) * self.width])
            for r in range(self.height)
        )
        return "".join(row + "\n" for row in rows)


def _mirror(position: int, size: int) -> int:
    if position < 0:
        return -position - 1
    if position >= size:
        return size - 1 - (position - size)
    return position