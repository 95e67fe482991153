"""Solver configuration: typed settings with YAML persistence."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar

import yaml


class SettingsError(ValueError):
    """Raised when settings cannot be read, parsed or validated."""


class BoundaryCondition(enum.Enum):
    """How cells outside the grid are treated."""

    DEAD = "dead"
    WRAP = "wrap"
    MIRROR = "mirror"


class SolverBackend(enum.Enum):
    """Which SAT solver engine to use."""

    CADICAL = "cadical"
    PARKISSAT = "parkissat"


class OptimizationLevel(enum.Enum):
    """Trade-off between solving speed and thoroughness."""

    FAST = "fast"
    BALANCED = "balanced"
    THOROUGH = "thorough"


class OutputFormat(enum.Enum):
    """Format used when saving solutions."""

    TEXT = "text"
    JSON = "json"
    VISUAL = "visual"


@dataclass
class SimulationConfig:
    generations: int = 5
    boundary_condition: BoundaryCondition = BoundaryCondition.DEAD


@dataclass
class SolverConfig:
    max_solutions: int = 10
    timeout_seconds: int = 300
    optimization_level: OptimizationLevel = OptimizationLevel.BALANCED
    backend: SolverBackend = SolverBackend.CADICAL


@dataclass
class InputConfig:
    target_state_file: Path = field(
        default_factory=lambda: Path("input/target_states/example.txt")
    )


@dataclass
class OutputConfig:
    format: OutputFormat = OutputFormat.TEXT
    save_intermediate: bool = False
    output_directory: Path = field(default_factory=lambda: Path("output/solutions"))


@dataclass
class EncodingConfig:
    symmetry_breaking: bool = False


@dataclass
class CliOverrides:
    """Values given on the command line that take precedence over a file."""

    generations: Optional[int] = None
    max_solutions: Optional[int] = None
    target_file: Optional[Path] = None
    output_dir: Optional[Path] = None


_E = TypeVar("_E", bound=enum.Enum)


def _field(data: Mapping[str, Any], key: str, where: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise SettingsError(f"{where}: missing field `{key}`") from None


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = _field(data, key, "settings")
    if not isinstance(value, Mapping):
        raise SettingsError(f"settings.{key}: expected a mapping")
    return value


def _uint(data: Mapping[str, Any], key: str, where: str) -> int:
    value = _field(data, key, where)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SettingsError(f"{where}.{key}: expected a non-negative integer, got {value!r}")
    return value


def _bool(data: Mapping[str, Any], key: str, where: str) -> bool:
    value = _field(data, key, where)
    if not isinstance(value, bool):
        raise SettingsError(f"{where}.{key}: expected a boolean, got {value!r}")
    return value


def _path(data: Mapping[str, Any], key: str, where: str) -> Path:
    value = _field(data, key, where)
    if not isinstance(value, str):
        raise SettingsError(f"{where}.{key}: expected a path string, got {value!r}")
    return Path(value)


def _enum(data: Mapping[str, Any], key: str, where: str, kind: Type[_E]) -> _E:
    value = _field(data, key, where)
    try:
        return kind(value)
    except ValueError:
        allowed = ", ".join(member.value for member in kind)
        raise SettingsError(
            f"{where}.{key}: unknown variant {value!r}, expected one of {allowed}"
        ) from None


@dataclass
class Settings:
    """Complete configuration of a reverse Game of Life run."""

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    encoding: EncodingConfig = field(default_factory=EncodingConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        """Build settings from a nested mapping; every field is required."""
        if not isinstance(data, Mapping):
            raise SettingsError("settings: expected a mapping")
        sim = _section(data, "simulation")
        solver = _section(data, "solver")
        inp = _section(data, "input")
        out = _section(data, "output")
        enc = _section(data, "encoding")
        return cls(
            simulation=SimulationConfig(
                generations=_uint(sim, "generations", "simulation"),
                boundary_condition=_enum(
                    sim, "boundary_condition", "simulation", BoundaryCondition
                ),
            ),
            solver=SolverConfig(
                max_solutions=_uint(solver, "max_solutions", "solver"),
                timeout_seconds=_uint(solver, "timeout_seconds", "solver"),
                optimization_level=_enum(
                    solver, "optimization_level", "solver", OptimizationLevel
                ),
                backend=_enum(solver, "backend", "solver", SolverBackend),
            ),
            input=InputConfig(
                target_state_file=_path(inp, "target_state_file", "input"),
            ),
            output=OutputConfig(
                format=_enum(out, "format", "output", OutputFormat),
                save_intermediate=_bool(out, "save_intermediate", "output"),
                output_directory=_path(out, "output_directory", "output"),
            ),
            encoding=EncodingConfig(
                symmetry_breaking=_bool(enc, "symmetry_breaking", "encoding"),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as a nested mapping of plain values."""
        return {
            "simulation": {
                "generations": self.simulation.generations,
                "boundary_condition": self.simulation.boundary_condition.value,
            },
            "solver": {
                "max_solutions": self.solver.max_solutions,
                "timeout_seconds": self.solver.timeout_seconds,
                "optimization_level": self.solver.optimization_level.value,
                "backend": self.solver.backend.value,
            },
            "input": {
                "target_state_file": str(self.input.target_state_file),
            },
            "output": {
                "format": self.output.format.value,
                "save_intermediate": self.output.save_intermediate,
                "output_directory": str(self.output.output_directory),
            },
            "encoding": {
                "symmetry_breaking": self.encoding.symmetry_breaking,
            },
        }

    @classmethod
    def from_file(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file and validate them."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Failed to read config file: {path}: {exc}") from exc
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise SettingsError(f"Failed to parse config file: {path}: {exc}") from exc
        try:
            settings = cls.from_dict(data)
        except SettingsError as exc:
            raise SettingsError(f"Failed to parse config file: {path}: {exc}") from exc
        settings.validate()
        return settings

    def to_file(self, path: str | Path) -> None:
        """Write the settings to a YAML file, creating parent directories."""
        path = Path(path)
        content = yaml.safe_dump(self.to_dict(), sort_keys=False)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SettingsError(f"Failed to create directory: {path.parent}: {exc}") from exc
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Failed to write config file: {path}: {exc}") from exc

    def validate(self) -> None:
        """Raise SettingsError if the settings cannot describe a runnable problem."""
        if self.simulation.generations == 0:
            raise SettingsError("Number of generations must be positive")
        if self.solver.max_solutions == 0:
            raise SettingsError("Maximum solutions must be positive")
        if not Path(self.input.target_state_file).exists():
            raise SettingsError(
                f"Target state file does not exist: {self.input.target_state_file}"
            )

    def merge_with_cli(self, overrides: CliOverrides) -> None:
        """Apply the command-line values that were given."""
        if overrides.generations is not None:
            self.simulation.generations = overrides.generations
        if overrides.max_solutions is not None:
            self.solver.max_solutions = overrides.max_solutions
        if overrides.target_file is not None:
            self.input.target_state_file = Path(overrides.target_file)
        if overrides.output_dir is not None:
            self.output.output_directory = Path(overrides.output_dir)