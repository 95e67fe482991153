"""Solutions to reverse Game of Life problems and their quality analysis."""

from __future__ import annotations

import hashlib
import json
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from liferewind.grid import Grid

_MAX_OSCILLATOR_PERIOD = 8


def is_block_pattern(grid: Grid) -> bool:
    """Whether the only living cells form a single 2x2 block."""
    if grid.living_count() != 4:
        return False
    return any(
        grid.get(row, col)
        and grid.get(row, col + 1)
        and grid.get(row + 1, col)
        and grid.get(row + 1, col + 1)
        for row in range(max(grid.height - 1, 0))
        for col in range(max(grid.width - 1, 0))
    )


def _consecutive(values: Sequence[int]) -> bool:
    ordered = sorted(values)
    return all(b == a + 1 for a, b in zip(ordered, ordered[1:]))


def is_blinker_pattern(grid: Grid) -> bool:
    """Whether the only living cells are three in a straight horizontal or vertical line."""
    living = grid.living_cells()
    if len(living) != 3:
        return False
    rows = [row for row, _ in living]
    cols = [col for _, col in living]
    if len(set(rows)) == 1:
        return _consecutive(cols)
    if len(set(cols)) == 1:
        return _consecutive(rows)
    return False


def _detect_known_patterns(grid: Grid) -> bool:
    count = grid.living_count()
    if count == 4:
        return is_block_pattern(grid)
    if count == 3:
        return is_blinker_pattern(grid)
    return False


def check_still_life(evolution_path: Sequence[Grid]) -> bool:
    """Whether the first two states of the path are identical."""
    if len(evolution_path) < 2:
        return False
    return evolution_path[0] == evolution_path[1]


def check_oscillator(evolution_path: Sequence[Grid]) -> tuple[bool, Optional[int]]:
    """Detect an oscillation of period 2 to 8 in the path; return (found, period)."""
    length = len(evolution_path)
    if length < 3:
        return False, None
    for period in range(2, min(_MAX_OSCILLATOR_PERIOD, length - 1) + 1):
        if evolution_path[0] != evolution_path[period]:
            continue
        periodic = all(
            evolution_path[i] == evolution_path[i + period]
            for i in range(1, period)
            if i + period < length
        )
        if periodic:
            return True, period
    return False, None


def _center_of_mass(cells: Sequence[tuple[int, int]]) -> tuple[float, float]:
    if not cells:
        return 0.0, 0.0
    count = len(cells)
    return (
        sum(col for _, col in cells) / count,
        sum(row for row, _ in cells) / count,
    )


def check_moving_patterns(evolution_path: Sequence[Grid]) -> bool:
    """Whether the centre of mass shifts noticeably between consecutive states."""
    for previous, current in zip(evolution_path, evolution_path[1:]):
        prev_cells = previous.living_cells()
        curr_cells = current.living_cells()
        if prev_cells and len(prev_cells) == len(curr_cells):
            px, py = _center_of_mass(prev_cells)
            cx, cy = _center_of_mass(curr_cells)
            if math.hypot(px - cx, py - cy) > 0.5:
                return True
    return False


def _stability_score(is_still_life: bool, is_oscillator: bool, has_moving: bool) -> float:
    if is_still_life:
        return 1.0
    if is_oscillator:
        return 0.8
    if has_moving:
        return 0.3
    return 0.5


@dataclass
class StabilityAnalysis:
    """Stability properties of an evolution path."""

    is_still_life: bool = False
    is_oscillator: bool = False
    oscillation_period: Optional[int] = None
    has_moving_patterns: bool = False
    stability_score: float = 0.0

    @classmethod
    def analyze(cls, evolution_path: Sequence[Grid]) -> "StabilityAnalysis":
        """Analyse a path; paths shorter than two states get the default analysis."""
        if len(evolution_path) < 2:
            return cls()
        still = check_still_life(evolution_path)
        oscillator, period = check_oscillator(evolution_path)
        moving = check_moving_patterns(evolution_path)
        return cls(
            is_still_life=still,
            is_oscillator=oscillator,
            oscillation_period=period,
            has_moving_patterns=moving,
            stability_score=_stability_score(still, oscillator, moving),
        )

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> "StabilityAnalysis":
        period = data["oscillation_period"]
        return cls(
            is_still_life=bool(data["is_still_life"]),
            is_oscillator=bool(data["is_oscillator"]),
            oscillation_period=None if period is None else int(period),
            has_moving_patterns=bool(data["has_moving_patterns"]),
            stability_score=float(data["stability_score"]),
        )


def _generate_id(predecessor: Grid) -> str:
    digest = hashlib.blake2b(digest_size=8)
    digest.update(bytes(int(cell) for cell in predecessor.cells))
    digest.update(predecessor.width.to_bytes(8, "little"))
    digest.update(predecessor.height.to_bytes(8, "little"))
    return f"sol_{digest.hexdigest()}"


def _density(grid: Grid) -> float:
    total = grid.width * grid.height
    return grid.living_count() / total if total else math.nan


def _quality_score(
    predecessor: Grid, stability: StabilityAnalysis, contains_known_patterns: bool
) -> float:
    score = 0.5
    if contains_known_patterns:
        score += 0.2
    score += stability.stability_score * 0.3
    if _density(predecessor) < 0.3:
        score += 0.1
    if stability.is_still_life:
        score += 0.2
    elif stability.is_oscillator:
        score += 0.1
    return min(score, 1.0)


@dataclass
class SolutionMetadata:
    """Derived facts about a solution."""

    id: str
    predecessor_living_cells: int
    target_living_cells: int
    predecessor_density: float
    contains_known_patterns: bool
    stability: StabilityAnalysis
    quality_score: float

    @classmethod
    def analyze(
        cls, predecessor: Grid, target: Grid, evolution_path: Sequence[Grid]
    ) -> "SolutionMetadata":
        """Compute metadata for a predecessor, its target and the path between them."""
        known = _detect_known_patterns(predecessor)
        stability = StabilityAnalysis.analyze(evolution_path)
        return cls(
            id=_generate_id(predecessor),
            predecessor_living_cells=predecessor.living_count(),
            target_living_cells=target.living_count(),
            predecessor_density=_density(predecessor),
            contains_known_patterns=known,
            stability=stability,
            quality_score=_quality_score(predecessor, stability, known),
        )

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> "SolutionMetadata":
        return cls(
            id=str(data["id"]),
            predecessor_living_cells=int(data["predecessor_living_cells"]),
            target_living_cells=int(data["target_living_cells"]),
            predecessor_density=float(data["predecessor_density"]),
            contains_known_patterns=bool(data["contains_known_patterns"]),
            stability=StabilityAnalysis._from_dict(data["stability"]),
            quality_score=float(data["quality_score"]),
        )


@dataclass
class SolutionSummary:
    """Compact description of a solution for display."""

    id: str
    predecessor_living_cells: int
    target_living_cells: int
    generations: int
    quality_score: float
    solve_time_ms: int
    is_still_life: bool
    is_oscillator: bool

    def __str__(self) -> str:
        return (
            f"Solution {self.id}: {self.predecessor_living_cells} → "
            f"{self.target_living_cells} cells, {self.generations} gen, "
            f"quality {self.quality_score:.2f}, {self.solve_time_ms}ms"
        )


@dataclass
class Solution:
    """A predecessor state that evolves into the target, with its evolution path.

    ``solve_time`` is in seconds and is not stored in the JSON form.
    """

    predecessor: Grid
    target: Grid
    generations: int
    evolution_path: list[Grid]
    metadata: SolutionMetadata
    solve_time: float = field(default=0.0, compare=False)

    @classmethod
    def create(
        cls,
        predecessor: Grid,
        target: Grid,
        generations: int,
        evolution_path: Sequence[Grid],
        solve_time: float,
    ) -> "Solution":
        """Build a solution, analysing it to produce its metadata."""
        path = list(evolution_path)
        return cls(
            predecessor=predecessor,
            target=target,
            generations=generations,
            evolution_path=path,
            metadata=SolutionMetadata.analyze(predecessor, target, path),
            solve_time=float(solve_time),
        )

    @property
    def initial_state(self) -> Grid:
        return self.predecessor

    @property
    def final_state(self) -> Grid:
        return self.target

    def state_at_generation(self, generation: int) -> Optional[Grid]:
        """The state at a generation of the path, or None if out of range."""
        if 0 <= generation < len(self.evolution_path):
            return self.evolution_path[generation]
        return None

    def is_equivalent_to(self, other: "Solution") -> bool:
        """Whether both solutions have the same predecessor."""
        return self.predecessor == other.predecessor

    def summary(self) -> SolutionSummary:
        return SolutionSummary(
            id=self.metadata.id,
            predecessor_living_cells=self.metadata.predecessor_living_cells,
            target_living_cells=self.metadata.target_living_cells,
            generations=self.generations,
            quality_score=self.metadata.quality_score,
            solve_time_ms=int(self.solve_time * 1000),
            is_still_life=self.metadata.stability.is_still_life,
            is_oscillator=self.metadata.stability.is_oscillator,
        )

    def to_json(self) -> str:
        """Pretty-printed JSON form of the solution."""
        data = {
            "predecessor": self.predecessor.to_dict(),
            "target": self.target.to_dict(),
            "generations": self.generations,
            "evolution_path": [grid.to_dict() for grid in self.evolution_path],
            "metadata": asdict(self.metadata),
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "Solution":
        """Read a solution from JSON; raises ValueError on malformed input."""
        data = json.loads(text)
        if not isinstance(data, Mapping):
            raise ValueError("solution JSON must be an object")
        try:
            return cls(
                predecessor=Grid.from_dict(data["predecessor"]),
                target=Grid.from_dict(data["target"]),
                generations=int(data["generations"]),
                evolution_path=[Grid.from_dict(g) for g in data["evolution_path"]],
                metadata=SolutionMetadata._from_dict(data["metadata"]),
            )
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from None
        except TypeError as exc:
            raise ValueError(f"malformed solution: {exc}") from exc

    def save_to_file(self, path: str | Path) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load_from_file(cls, path: str | Path) -> "Solution":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def format_evolution(self) -> str:
        """Human-readable rendering of every state in the evolution path."""
        parts = [
            f"Solution {self.metadata.id} - {self.generations} generations\n",
            f"Quality: {self.metadata.quality_score:.2f}, "
            f"Solve time: {self.solve_time:.3f}s\n\n",
        ]
        for generation, grid in enumerate(self.evolution_path):
            parts.append(f"Generation {generation}:\n{grid}\n")
        return "".join(parts)

    def is_better_than(self, other: "Solution") -> bool:
        return self.metadata.quality_score > other.metadata.quality_score