# liferewind

Building blocks for working backwards in Conway's Game of Life: read a
target pattern, evolve candidate predecessor states, check that they really
lead to the target, and analyse and score the solutions.

## Installation

```
pip install liferewind
```

## Grid files

A grid is a plain text file with one row per line, `1` for a living cell
and `0` for a dead one. Blank lines and surrounding whitespace are
ignored; every row must have the same length. Malformed text raises
`liferewind.grid_io.GridFormatError` (a `ValueError`).

```
000
111
000
```

## Usage

```python
from liferewind.settings import BoundaryCondition, Settings
from liferewind.grid_io import parse_grid_from_string, grid_to_string
from liferewind.rules import evolve, validate_evolution
from liferewind.validator import SolutionValidator

target = parse_grid_from_string("000\n111\n000\n", BoundaryCondition.DEAD)
candidate = parse_grid_from_string("010\n010\n010\n", BoundaryCondition.DEAD)

print(grid_to_string(evolve(candidate)))          # 000 / 111 / 000
print(validate_evolution(candidate, target, 1))   # True

settings = Settings()
settings.simulation.generations = 1
result = SolutionValidator(settings).validate(candidate, target)
print(result)
```

## Modules

### `liferewind.grid`

`Grid` stores cells row by row. Build one with `Grid.empty`,
`Grid.from_cells` or `Grid.from_dict`; read and change cells with `get`
(cells outside the grid read as dead) and `set` (raises `IndexError`
outside the grid). `count_neighbors` honours the boundary condition:
`DEAD` (cells outside are dead), `WRAP` (toroidal) or `MIRROR` (reflected
at the edges). `living_cells`, `living_count`, `is_empty`,
`with_boundary_condition` and `to_dict` complete the class.

### `liferewind.rules`

`evolve` and `evolve_generations` advance a grid; `should_be_alive`
applies the birth-on-3 / survive-on-2-or-3 rule; `validate_evolution`
checks that a predecessor becomes a target after a number of generations;
`grids_equal` compares dimensions and cells only.

### `liferewind.grid_io`

`parse_grid_from_string`, `grid_to_string`, `load_grid_from_file` and
`save_grid_to_file` convert between grids and text.
`create_example_grids(directory)` writes `glider.txt`, `blinker.txt`,
`block.txt` and `beacon.txt`, and `load_grids_from_directory` loads every
`.txt` grid in a directory, sorted by name, logging and skipping files that
fail to load.

### `liferewind.settings`

`Settings` holds the simulation, solver, input, output and encoding
configuration, with defaults for all of them. It reads and writes YAML with
`Settings.from_file` and `Settings.to_file` (and plain mappings with
`from_dict` / `to_dict`); `Settings.merge_with_cli` applies the values set
in a `CliOverrides`. `Settings.validate` raises `SettingsError` (a
`ValueError`) when generations or the solution limit are zero, or when the
target state file does not exist.

### `liferewind.validator`

`SolutionValidator(settings)` validates a predecessor against a target
for the configured number of generations. `validate` returns a
`ValidationResult` with the evolution path, any `RuleViolation`s, an error
message and timing details; `validate_transition` checks one step;
`validate_multiple` validates many pairs into a `MultiValidationResult`;
`quick_validate` checks only the final state; `validate_grid_state`
reports density and isolated-cell heuristics in a `GridValidationResult`.

### `liferewind.solution`

`Solution.create` wraps a predecessor, its target and the evolution path
between them (with a solve time in seconds) and analyses it into
`SolutionMetadata`: living-cell counts, density, block and blinker
detection, a `StabilityAnalysis` (still life, oscillator period 2–8,
moving patterns) and a quality score between 0 and 1. Solutions serialise
with `to_json` / `from_json` and `save_to_file` / `load_from_file` (the
solve time is not stored), render with `format_evolution`, and summarise
with `summary`.

## What this package does not do

It does not search for predecessors itself: there is no SAT encoding or
solver, so the solver and encoding sections of `Settings` are only stored
and passed along. It also has no command-line program; everything is used
from Python.