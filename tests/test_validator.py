from pathlib import Path

import pytest

from liferewind.grid import Grid
from liferewind.settings import (
    BoundaryCondition,
    EncodingConfig,
    InputConfig,
    OptimizationLevel,
    OutputConfig,
    OutputFormat,
    Settings,
    SimulationConfig,
    SolverBackend,
    SolverConfig,
)
from liferewind.validator import SolutionValidator

F, T = False, True


def make_settings(generations=1):
    return Settings(
        simulation=SimulationConfig(
            generations=generations, boundary_condition=BoundaryCondition.DEAD
        ),
        solver=SolverConfig(
            max_solutions=5,
            timeout_seconds=10,
            optimization_level=OptimizationLevel.FAST,
            backend=SolverBackend.CADICAL,
        ),
        input=InputConfig(target_state_file=Path("test.txt")),
        output=OutputConfig(
            format=OutputFormat.TEXT,
            save_intermediate=False,
            output_directory=Path("output"),
        ),
        encoding=EncodingConfig(symmetry_breaking=False),
    )


@pytest.fixture
def validator():
    return SolutionValidator(make_settings())


VERTICAL = [[F, T, F], [F, T, F], [F, T, F]]
HORIZONTAL = [[F, F, F], [T, T, T], [F, F, F]]
SINGLE = [[F, F, F], [F, T, F], [F, F, F]]


def test_valid_blinker_evolution(validator):
    predecessor = Grid.from_cells(VERTICAL)
    target = Grid.from_cells(HORIZONTAL)
    result = validator.validate(predecessor, target)
    assert result.is_valid
    assert result.validation_details.final_state_matches
    assert result.validation_details.intermediate_states_valid
    assert len(result.validation_details.rule_violations) == 0
    assert result.error_message is None
    assert len(result.evolution_path) == 2
    assert result.evolution_path[-1] == target


def test_invalid_evolution(validator):
    predecessor = Grid.empty(3, 3)
    target = Grid.from_cells(SINGLE)
    result = validator.validate(predecessor, target)
    assert not result.is_valid
    assert not result.validation_details.final_state_matches
    assert result.error_message == "Final state does not match target. "


def test_dimension_mismatch(validator):
    result = validator.validate(Grid.empty(3, 3), Grid.empty(4, 4))
    assert not result.is_valid
    assert result.error_message is not None
    assert "dimension mismatch" in result.error_message
    assert result.evolution_path == []


def test_boundary_mismatch(validator):
    predecessor = Grid.empty(3, 3, BoundaryCondition.DEAD)
    target = Grid.empty(3, 3, BoundaryCondition.WRAP)
    result = validator.validate(predecessor, target)
    assert not result.is_valid
    assert "Boundary condition mismatch" in result.error_message


def test_quick_validation(validator):
    grid = Grid.empty(3, 3)
    assert validator.quick_validate(grid, grid) is True
    assert validator.quick_validate(grid, Grid.from_cells(SINGLE)) is False


def test_grid_state_validation(validator):
    normal = Grid.from_cells([[F, T, F], [T, F, T], [F, T, F]])
    assert validator.validate_grid_state(normal).is_valid

    isolated = Grid.from_cells([[T, F, T], [F, F, F], [T, F, T]])
    result = validator.validate_grid_state(isolated)
    assert result.isolated_cells == 4
    assert validator.count_isolated_cells(isolated) == 4


def test_dense_grid_reports_issue(validator):
    full = Grid.from_cells([[T, T, T], [T, T, T], [T, T, T]])
    result = validator.validate_grid_state(full)
    assert not result.is_valid
    assert any("density" in issue for issue in result.issues)
    assert "ISSUES FOUND" in str(result)


def test_rule_violation_detection(validator):
    current = Grid.from_cells(SINGLE)
    following = Grid.from_cells(SINGLE)
    violations = validator.validate_transition(current, following, 0)
    assert violations
    assert violations[0].cell_position == (1, 1)
    assert violations[0].neighbor_count == 0
    assert violations[0].expected_state is False
    assert violations[0].actual_state is True
    assert "generation 1" in violations[0].description


def test_validate_multiple(validator):
    good = (Grid.from_cells(VERTICAL), Grid.from_cells(HORIZONTAL))
    bad = (Grid.empty(3, 3), Grid.from_cells(SINGLE))
    result = validator.validate_multiple([good, bad, good])
    assert result.total_solutions == 3
    assert result.valid_solutions == 2
    assert result.invalid_solutions == 1
    assert [i for i, _ in result.individual_results] == [0, 1, 2]
    assert "Success rate: 66.7%" in str(result)


def test_path_length_follows_generations():
    validator = SolutionValidator(make_settings(generations=2))
    grid = Grid.from_cells(VERTICAL)
    result = validator.validate(grid, grid)
    assert result.is_valid
    assert len(result.evolution_path) == 3
    assert result.validation_details.generations_checked == 2
    assert result.validation_details.performance_metrics.cells_checked == 27


def test_result_display(validator):
    result = validator.validate(Grid.from_cells(VERTICAL), Grid.from_cells(HORIZONTAL))
    text = str(result)
    assert text.startswith("Validation Result: VALID\n")
    assert "Rule violations: 0\n" in text