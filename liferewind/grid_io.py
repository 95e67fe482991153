"""Reading and writing grids as text files of '0' and '1' characters."""

from __future__ import annotations

import logging
from pathlib import Path

from liferewind.grid import Grid
from liferewind.settings import BoundaryCondition

logger = logging.getLogger(__name__)

_CELL_VALUES = {"0": False, "1": True}

_EXAMPLES = {
    "glider.txt": "00100\n10100\n01100\n00000\n00000\n",
    "blinker.txt": "000\n111\n000\n",
    "block.txt": "0000\n0110\n0110\n0000\n",
    "beacon.txt": "110000\n110000\n001100\n001100\n",
}


class GridFormatError(ValueError):
    """Raised when text cannot be read as a grid."""


def parse_grid_from_string(
    content: str, boundary_condition: BoundaryCondition = BoundaryCondition.DEAD
) -> Grid:
    """Parse a grid where each non-blank line is a row of '0' and '1'."""
    lines = [line.strip() for line in content.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise GridFormatError("Grid file is empty or contains no valid rows")

    width = len(lines[0])
    rows = []
    for row_idx, line in enumerate(lines):
        if len(line) != width:
            raise GridFormatError(
                f"Row {row_idx} has length {len(line)}, expected {width} "
                "(all rows must have the same length)"
            )
        row = []
        for col_idx, ch in enumerate(line):
            try:
                row.append(_CELL_VALUES[ch])
            except KeyError:
                raise GridFormatError(
                    f"Invalid character '{ch}' at position ({row_idx}, {col_idx}). "
                    "Only '0' and '1' are allowed"
                ) from None
        rows.append(row)

    return Grid.from_cells(rows, boundary_condition)


def load_grid_from_file(
    path: str | Path, boundary_condition: BoundaryCondition = BoundaryCondition.DEAD
) -> Grid:
    """Read a grid from a text file."""
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    try:
        return parse_grid_from_string(content, boundary_condition)
    except ValueError as exc:
        raise GridFormatError(f"Failed to parse grid from file: {path}: {exc}") from exc


def grid_to_string(grid: Grid) -> str:
    """Render a grid as lines of '0' and '1', each ending in a newline."""
    return "".join(
        "".join("1" if grid.get(row, col) else "0" for col in range(grid.width)) + "\n"
        for row in range(grid.height)
    )


def save_grid_to_file(grid: Grid, path: str | Path) -> None:
    """Write a grid to a text file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(grid_to_string(grid), encoding="utf-8")


def load_grids_from_directory(
    dir_path: str | Path,
    boundary_condition: BoundaryCondition = BoundaryCondition.DEAD,
) -> list[tuple[str, Grid]]:
    """Load every readable ``.txt`` grid in a directory, sorted by file stem.

    Files that fail to load are logged and skipped.
    """
    grids: list[tuple[str, Grid]] = []
    for path in Path(dir_path).iterdir():
        if not path.is_file() or path.suffix != ".txt":
            continue
        try:
            grids.append((path.stem, load_grid_from_file(path, boundary_condition)))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load %s: %s", path, exc)
    grids.sort(key=lambda item: item[0])
    return grids


def create_example_grids(output_dir: str | Path) -> None:
    """Write glider, blinker, block and beacon example grids to a directory."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in _EXAMPLES.items():
        (directory / name).write_text(content, encoding="utf-8")