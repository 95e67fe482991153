"""Game of Life grids, rules, grid files, settings, validation and analysis of predecessor states."""

__version__ = "0.1.0"
__all__ = ["settings", "grid", "rules", "grid_io", "solution", "validator"]