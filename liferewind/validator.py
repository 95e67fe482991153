"""Checking that predecessor states really evolve into their targets."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional

from liferewind.grid import Grid
from liferewind.rules import evolve, evolve_generations, grids_equal, should_be_alive
from liferewind.settings import Settings

_EXAMPLE_VIOLATIONS = 3
_STATE_WORDS = {True: "alive", False: "dead"}


@dataclass
class RuleViolation:
    """A cell whose next state disagrees with the Game of Life rules."""

    generation: int
    cell_position: tuple[int, int]
    expected_state: bool
    actual_state: bool
    neighbor_count: int
    description: str


@dataclass
class ValidationMetrics:
    """Cost of a validation run."""

    validation_time_ms: int = 0
    states_validated: int = 0
    cells_checked: int = 0


@dataclass
class ValidationDetails:
    """What a validation run checked and found."""

    generations_checked: int = 0
    intermediate_states_valid: bool = False
    final_state_matches: bool = False
    rule_violations: list[RuleViolation] = field(default_factory=list)
    performance_metrics: ValidationMetrics = field(default_factory=ValidationMetrics)


@dataclass
class ValidationResult:
    """Outcome of validating one predecessor against its target."""

    is_valid: bool
    evolution_path: list[Grid]
    error_message: Optional[str]
    validation_details: ValidationDetails

    def __str__(self) -> str:
        details = self.validation_details
        lines = [f"Validation Result: {'VALID' if self.is_valid else 'INVALID'}"]
        if self.error_message is not None:
            lines.append(f"Error: {self.error_message}")
        lines += [
            f"Generations checked: {details.generations_checked}",
            f"Final state matches: {str(details.final_state_matches).lower()}",
            "Intermediate states valid: "
            f"{str(details.intermediate_states_valid).lower()}",
            f"Rule violations: {len(details.rule_violations)}",
            f"Validation time: {details.performance_metrics.validation_time_ms}ms",
        ]
        return "".join(line + "\n" for line in lines)


@dataclass
class MultiValidationResult:
    """Outcome of validating several predecessor/target pairs."""

    total_solutions: int
    valid_solutions: int
    invalid_solutions: int
    total_rule_violations: int
    individual_results: list[tuple[int, ValidationResult]]

    @property
    def success_rate(self) -> float:
        if self.total_solutions == 0:
            return math.nan
        return self.valid_solutions / self.total_solutions

    def __str__(self) -> str:
        lines = [
            "Multi-Solution Validation Results:",
            f"  Total solutions: {self.total_solutions}",
            f"  Valid solutions: {self.valid_solutions}",
            f"  Invalid solutions: {self.invalid_solutions}",
            f"  Success rate: {self.success_rate * 100.0:.1f}%",
            f"  Total rule violations: {self.total_rule_violations}",
        ]
        return "".join(line + "\n" for line in lines)


@dataclass
class GridValidationResult:
    """Plausibility report on a single grid."""

    is_valid: bool
    issues: list[str]
    living_cells: int
    density: float
    isolated_cells: int

    def __str__(self) -> str:
        lines = [
            f"Grid Validation: {'VALID' if self.is_valid else 'ISSUES FOUND'}",
            f"  Living cells: {self.living_cells}",
            f"  Density: {self.density * 100.0:.1f}%",
            f"  Isolated cells: {self.isolated_cells}",
        ]
        if self.issues:
            lines.append("  Issues:")
            lines += [f"    - {issue}" for issue in self.issues]
        return "".join(line + "\n" for line in lines)


class SolutionValidator:
    """Validates predecessor states against targets using the configured settings."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def generations(self) -> int:
        return self.settings.simulation.generations

    def validate(self, predecessor: Grid, target: Grid) -> ValidationResult:
        """Evolve the predecessor and check every step and the final state."""
        start = time.perf_counter()

        if predecessor.width != target.width or predecessor.height != target.height:
            return ValidationResult(
                is_valid=False,
                evolution_path=[],
                error_message=(
                    "Grid dimension mismatch: predecessor "
                    f"{predecessor.width}x{predecessor.height}, "
                    f"target {target.width}x{target.height}"
                ),
                validation_details=ValidationDetails(),
            )

        if predecessor.boundary_condition != target.boundary_condition:
            return ValidationResult(
                is_valid=False,
                evolution_path=[],
                error_message="Boundary condition mismatch between predecessor and target",
                validation_details=ValidationDetails(),
            )

        evolution_path = [predecessor]
        violations: list[RuleViolation] = []
        current = predecessor
        for generation in range(self.generations):
            following = evolve(current)
            evolution_path.append(following)
            violations.extend(self.validate_transition(current, following, generation))
            current = following

        final_matches = grids_equal(current, target)
        intermediate_valid = not violations
        is_valid = final_matches and intermediate_valid

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        details = ValidationDetails(
            generations_checked=self.generations,
            intermediate_states_valid=intermediate_valid,
            final_state_matches=final_matches,
            rule_violations=violations,
            performance_metrics=ValidationMetrics(
                validation_time_ms=elapsed_ms,
                states_validated=len(evolution_path),
                cells_checked=len(evolution_path) * predecessor.width * predecessor.height,
            ),
        )
        return ValidationResult(
            is_valid=is_valid,
            evolution_path=evolution_path,
            error_message=None if is_valid else _error_message(details),
            validation_details=details,
        )

    def validate_transition(
        self, current: Grid, following: Grid, generation: int
    ) -> list[RuleViolation]:
        """Cells of ``following`` that disagree with the rules applied to ``current``."""
        violations = []
        for row in range(current.height):
            for col in range(current.width):
                alive = current.get(row, col)
                actual = following.get(row, col)
                neighbors = current.count_neighbors(row, col)
                expected = should_be_alive(alive, neighbors)
                if actual == expected:
                    continue
                violations.append(
                    RuleViolation(
                        generation=generation,
                        cell_position=(row, col),
                        expected_state=expected,
                        actual_state=actual,
                        neighbor_count=neighbors,
                        description=(
                            f"Cell ({row}, {col}) at generation {generation + 1} "
                            f"should be {_STATE_WORDS[bool(expected)]} but is "
                            f"{_STATE_WORDS[bool(actual)]} "
                            f"(current: {_STATE_WORDS[bool(alive)]}, "
                            f"neighbors: {neighbors})"
                        ),
                    )
                )
        return violations

    def validate_multiple(
        self, pairs: Iterable[tuple[Grid, Grid]]
    ) -> MultiValidationResult:
        """Validate each (predecessor, target) pair and gather totals."""
        results = [
            (i, self.validate(predecessor, target))
            for i, (predecessor, target) in enumerate(pairs)
        ]
        valid = sum(result.is_valid for _, result in results)
        return MultiValidationResult(
            total_solutions=len(results),
            valid_solutions=valid,
            invalid_solutions=len(results) - valid,
            total_rule_violations=sum(
                len(result.validation_details.rule_violations) for _, result in results
            ),
            individual_results=results,
        )

    def quick_validate(self, predecessor: Grid, target: Grid) -> bool:
        """Check only that the final evolved state equals the target."""
        return grids_equal(evolve_generations(predecessor, self.generations), target)

    def validate_grid_state(self, grid: Grid) -> GridValidationResult:
        """Report heuristic signs that a grid is implausible."""
        issues = []
        if len(grid.cells) != grid.width * grid.height:
            issues.append("Grid cell count doesn't match dimensions")

        living = grid.living_count()
        density = living / len(grid.cells) if grid.cells else math.nan
        if density > 0.9:
            issues.append("Grid density is very high (>90%), which is unusual")

        isolated = self.count_isolated_cells(grid)
        if isolated > living // 2:
            issues.append("Many isolated cells detected, which is unusual")

        return GridValidationResult(
            is_valid=not issues,
            issues=issues,
            living_cells=living,
            density=density,
            isolated_cells=isolated,
        )

    def count_isolated_cells(self, grid: Grid) -> int:
        """Number of living cells with no living neighbours."""
        return sum(
            1
            for row, col in grid.living_cells()
            if grid.count_neighbors(row, col) == 0
        )


def _error_message(details: ValidationDetails) -> str:
    parts = []
    if not details.final_state_matches:
        parts.append("Final state does not match target. ")
    if not details.intermediate_states_valid:
        violations = details.rule_violations
        parts.append(f"Found {len(violations)} rule violations during evolution. ")
        examples = violations[:_EXAMPLE_VIOLATIONS]
        if examples:
            parts.append("Examples: ")
            parts.extend(f"{violation.description}; " for violation in examples)
        if len(violations) > _EXAMPLE_VIOLATIONS:
            parts.append(f"... and {len(violations) - _EXAMPLE_VIOLATIONS} more")
    return "".join(parts)