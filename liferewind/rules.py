"""Conway's Game of Life transition rules."""

from __future__ import annotations

from liferewind.grid import Grid

_MAX_NEIGHBORS = 8


def should_be_alive(current_state: bool, neighbor_count: int) -> bool:
    """Whether a cell lives in the next generation."""
    return neighbor_count == 3 or (current_state and neighbor_count == 2)


def evolve(grid: Grid) -> Grid:
    """Advance the grid by one generation."""
    cells = [
        should_be_alive(alive, grid.count_neighbors(*divmod(i, grid.width)))
        for i, alive in enumerate(grid.cells)
    ]
    return Grid(grid.width, grid.height, cells, grid.boundary_condition)


def evolve_generations(grid: Grid, generations: int) -> Grid:
    """Advance the grid by the given number of generations."""
    for _ in range(generations):
        grid = evolve(grid)
    return grid


def live_neighbor_counts() -> list[int]:
    """Neighbour counts that keep a live cell alive."""
    return [2, 3]


def birth_neighbor_counts() -> list[int]:
    """Neighbour counts that bring a dead cell to life."""
    return [3]


def survival_neighbor_counts() -> list[int]:
    """Neighbour counts under which a live cell survives."""
    return [2, 3]


def validate_evolution(predecessor: Grid, target: Grid, generations: int) -> bool:
    """Whether the predecessor evolves exactly into the target."""
    if predecessor.width != target.width or predecessor.height != target.height:
        return False
    return evolve_generations(predecessor, generations) == target


def grids_equal(first: Grid, second: Grid) -> bool:
    """Same dimensions and cells, regardless of boundary condition."""
    return (
        first.width == second.width
        and first.height == second.height
        and first.cells == second.cells
    )


def max_neighbor_count() -> int:
    return _MAX_NEIGHBORS


def is_valid_neighbor_count(count: int) -> bool:
    return 0 <= count <= _MAX_NEIGHBORS