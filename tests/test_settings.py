from pathlib import Path

import pytest
import yaml

from liferewind.settings import (
    BoundaryCondition,
    CliOverrides,
    OptimizationLevel,
    OutputFormat,
    Settings,
    SettingsError,
    SolverBackend,
)


@pytest.fixture
def target_file(tmp_path):
    path = tmp_path / "target.txt"
    path.write_text("010\n010\n010\n", encoding="utf-8")
    return path


def test_defaults_match_documented_values():
    settings = Settings()
    assert settings.simulation.generations == 5
    assert settings.simulation.boundary_condition is BoundaryCondition.DEAD
    assert settings.solver.max_solutions == 10
    assert settings.solver.timeout_seconds == 300
    assert settings.solver.optimization_level is OptimizationLevel.BALANCED
    assert settings.solver.backend is SolverBackend.CADICAL
    assert settings.input.target_state_file == Path("input/target_states/example.txt")
    assert settings.output.format is OutputFormat.TEXT
    assert settings.output.save_intermediate is False
    assert settings.output.output_directory == Path("output/solutions")
    assert settings.encoding.symmetry_breaking is False


def test_dict_round_trip():
    settings = Settings()
    settings.simulation.boundary_condition = BoundaryCondition.WRAP
    settings.solver.backend = SolverBackend.PARKISSAT
    assert Settings.from_dict(settings.to_dict()) == settings


def test_enum_values_are_snake_case():
    data = Settings().to_dict()
    assert data["simulation"]["boundary_condition"] == "dead"
    assert data["solver"]["optimization_level"] == "balanced"
    assert data["solver"]["backend"] == "cadical"


def test_file_round_trip(tmp_path, target_file):
    settings = Settings()
    settings.input.target_state_file = target_file
    settings.simulation.generations = 2
    path = tmp_path / "nested" / "config.yaml"
    settings.to_file(path)
    loaded = Settings.from_file(path)
    assert loaded == settings
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert raw["simulation"]["generations"] == 2


def test_from_file_validates(tmp_path):
    settings = Settings()
    settings.input.target_state_file = tmp_path / "missing.txt"
    path = tmp_path / "config.yaml"
    settings.to_file(path)
    with pytest.raises(SettingsError, match="does not exist"):
        Settings.from_file(path)


def test_from_file_missing_file(tmp_path):
    with pytest.raises(SettingsError, match="Failed to read"):
        Settings.from_file(tmp_path / "nope.yaml")


def test_from_file_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("simulation: [unclosed", encoding="utf-8")
    with pytest.raises(SettingsError, match="Failed to parse"):
        Settings.from_file(path)


def test_from_dict_missing_field():
    data = Settings().to_dict()
    del data["solver"]["backend"]
    with pytest.raises(SettingsError, match="backend"):
        Settings.from_dict(data)


def test_from_dict_unknown_variant():
    data = Settings().to_dict()
    data["simulation"]["boundary_condition"] = "sideways"
    with pytest.raises(SettingsError):
        Settings.from_dict(data)


def test_from_dict_rejects_negative_generations():
    data = Settings().to_dict()
    data["simulation"]["generations"] = -1
    with pytest.raises(SettingsError):
        Settings.from_dict(data)


def test_validate_zero_generations(target_file):
    settings = Settings()
    settings.input.target_state_file = target_file
    settings.simulation.generations = 0
    with pytest.raises(SettingsError, match="generations must be positive"):
        settings.validate()


def test_validate_zero_max_solutions(target_file):
    settings = Settings()
    settings.input.target_state_file = target_file
    settings.solver.max_solutions = 0
    with pytest.raises(SettingsError, match="Maximum solutions must be positive"):
        settings.validate()


def test_validate_missing_target(tmp_path):
    settings = Settings()
    settings.input.target_state_file = tmp_path / "absent.txt"
    with pytest.raises(SettingsError, match="Target state file does not exist"):
        settings.validate()


def test_merge_with_cli_applies_given_values(target_file, tmp_path):
    settings = Settings()
    settings.merge_with_cli(
        CliOverrides(generations=3, target_file=target_file, output_dir=tmp_path / "out")
    )
    assert settings.simulation.generations == 3
    assert settings.input.target_state_file == target_file
    assert settings.output.output_directory == tmp_path / "out"
    assert settings.solver.max_solutions == Settings().solver.max_solutions


def test_merge_with_empty_overrides_keeps_settings():
    settings = Settings()
    settings.merge_with_cli(CliOverrides())
    assert settings == Settings()