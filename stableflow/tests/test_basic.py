import logging
import io
import pytest
import numpy as np
import yaml

from stableflow.configs.settings import SolverConfig, ConfigManager, ConfigFormat
from stableflow.configs.presets import get_preset, list_presets
from stableflow.utils.error_handling import (
    SimulationError,
    ConfigurationError,
    PhysicsError,
    SolverError,
    validate_config,
    check_grid_size,
    check_numerical_stability,
    check_array_bounds,
    handle_simulation_error
)
from stableflow.utils.logging import SimulationLogger, Timer
from stableflow.utils.math_helpers import clamp, smoothstep, remap

def test_imports():
    """Test that the public API and its dependencies import"""
    import numba
    import stableflow

    assert stableflow.__version__
    for name in stableflow.__all__:
        assert hasattr(stableflow, name)
    assert numba.__version__

def test_config_round_trip_yaml(tmp_path):
    manager = ConfigManager(SolverConfig(size=48, viscosity=2e-5))
    path = tmp_path / "configs" / "solver.yaml"

    manager.save(str(path))
    with open(path) as f:
        raw = yaml.safe_load(f)
    assert raw["size"] == 48

    loaded = ConfigManager().load(str(path))
    assert loaded == SolverConfig(size=48, viscosity=2e-5)

def test_config_round_trip_json(tmp_path):
    path = tmp_path / "solver.json"
    ConfigManager(SolverConfig(iterations=30)).save(str(path), ConfigFormat.JSON)

    loaded = ConfigManager().load(str(path))
    assert loaded.iterations == 30

def test_config_rejects_unknown_fields(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("size: 8\nwidth: 3\n")

    with pytest.raises(ConfigurationError) as excinfo:
        ConfigManager().load(str(path))
    assert excinfo.value.details["fields"] == ["width"]

def test_config_validation():
    manager = ConfigManager(SolverConfig(
        size=0,
        iterations=-1,
        diffusivity=-1.0,
        dtype="float16",
        max_time_step=1.0,
        log_level="LOUD"
    ))

    errors = manager.validate()

    assert "Grid size must be positive" in errors
    assert "Number of iterations must be positive" in errors
    assert "Diffusivity must be non-negative" in errors
    assert "Maximum time step must not be below the minimum" in errors
    assert any("dtype" in error for error in errors)
    assert any("log level" in error for error in errors)
    with pytest.raises(ConfigurationError):
        manager.require_valid()

def test_config_load_rejects_mistyped_values(tmp_path):
    path = tmp_path / "mistyped.yaml"
    path.write_text("iterations: '20'\ndiffusivity: fast\n")

    with pytest.raises(ConfigurationError) as excinfo:
        ConfigManager().load(str(path))
    assert excinfo.value.details["field"] == "iterations"

    # Integers are accepted where floats are expected
    path.write_text("diffusivity: 0\ntime_step: 10\n")
    loaded = ConfigManager().load(str(path))
    assert loaded.diffusivity == 0
    assert loaded.time_step == 10

def test_validation_reports_mistyped_fields():
    manager = ConfigManager(SolverConfig(
        size=True,
        iterations="20",
        diffusivity="fast",
        max_time_step=None,
        log_level=10
    ))

    errors = manager.validate()

    assert "Invalid type for size: bool" in errors
    assert "Invalid type for iterations: str" in errors
    assert "Invalid type for diffusivity: str" in errors
    assert "Invalid type for max_time_step: NoneType" in errors
    assert "Invalid type for log_level: int" in errors
    assert not any("must be" in error for error in errors)
    with pytest.raises(ConfigurationError) as excinfo:
        manager.require_valid()
    assert excinfo.value.details["errors"] == errors

def test_default_config_is_valid():
    assert ConfigManager().validate() == []

def test_presets():
    assert "rotating_jet" in list_presets()

    config = get_preset("rotating_jet", size=32)
    assert config.size == 32
    assert config.diffusivity == 1e-7

    with pytest.raises(ConfigurationError):
        get_preset("missing")

def test_error_hierarchy():
    error = SolverError("diverged", details={"step": 3})
    assert isinstance(error, SimulationError)
    assert error.details == {"step": 3}
    assert PhysicsError("x").details == {}

def test_validate_config():
    validate_config({"size": 8}, {"size": int})
    with pytest.raises(ConfigurationError):
        validate_config({}, {"size": int})
    with pytest.raises(ConfigurationError):
        validate_config({"size": "8"}, {"size": int})

def test_check_grid_size():
    assert check_grid_size(np.int64(4)) == 4
    with pytest.raises(ConfigurationError):
        check_grid_size(-1)

def test_numerical_checks():
    check_numerical_stability(1.0, "value")
    with pytest.raises(PhysicsError):
        check_numerical_stability(float("inf"), "value")
    with pytest.raises(PhysicsError):
        check_array_bounds(np.array([0.0, 2e6]), "field")
    with pytest.raises(PhysicsError) as excinfo:
        check_array_bounds(np.array([np.nan, np.nan, 1.0]), "field")
    assert excinfo.value.details["count"] == 2

def test_handle_simulation_error_logs(caplog):
    logger = logging.getLogger("stableflow.test")
    with caplog.at_level(logging.ERROR, logger="stableflow.test"):
        handle_simulation_error(PhysicsError("blew up"), logger)
    assert "PhysicsError: blew up" in caplog.text

def test_simulation_logger_progress():
    stream = io.StringIO()
    progress = SimulationLogger(name="stableflow.test.progress", stream=stream)
    progress.start_simulation(4)
    progress.update_progress(2, "halfway")
    progress.end_simulation()
    progress.cleanup()

    output = stream.getvalue()
    assert "Total steps: 4" in output
    assert "Progress: 50.0% (Step 2/4)" in output
    assert "halfway" in output
    assert "Simulation completed successfully" in output

def test_timer():
    with Timer("work") as timer:
        sum(range(1000))
    assert timer.get_elapsed() >= 0.0
    assert Timer("idle").get_elapsed() == 0.0

def test_math_helpers():
    assert clamp(3.0, 0.5, 2.5) == 2.5
    assert clamp(-1.0, 0.5, 2.5) == 0.5
    assert clamp(1.0, 0.5, 2.5) == 1.0

    assert smoothstep(0.0, 1.0, 0.5) == 0.5
    assert smoothstep(0.0, 1.0, 2.0) == 1.0
    # Reversed edges invert the step
    assert smoothstep(0.25, 0.125, 0.0) == 1.0
    assert smoothstep(0.25, 0.125, 0.3) == 0.0

    assert remap(5.0, 0.0, 10.0, -1.0, 1.0) == 0.0

def test_rotating_jet_runs():
    from stableflow.examples.rotating_jet import run

    config = get_preset("rotating_jet", size=12, max_steps=3)
    solver = run(config, report_every=1)

    solver.check_stability()
    assert solver.step_count == 3
    assert solver.total_density() >= 0.0
    assert np.any(solver.vy != 0)

def test_rotating_jet_explicit_step_counts():
    from stableflow.examples.rotating_jet import run

    config = get_preset("rotating_jet", size=8, max_steps=3)
    solver = run(config, steps=0)
    assert solver.step_count == 0
    assert np.all(solver.density == 0)

    with pytest.raises(ConfigurationError):
        run(config, steps=-1)

def test_rotating_jet_divergence_raises_solver_error(monkeypatch):
    from stableflow.core.eulerian.solver import StableFluidSolver
    from stableflow.examples.rotating_jet import run

    def blow_up(self, dt, viscosity):
        self.vx[:] = np.inf

    monkeypatch.setattr(StableFluidSolver, "velocity_step", blow_up)
    config = get_preset("rotating_jet", size=8, max_steps=4)

    with pytest.raises(SolverError) as excinfo:
        run(config, report_every=2)
    assert excinfo.value.details["step"] == 2
    assert isinstance(excinfo.value.__cause__, PhysicsError)

def test_rotating_jet_main_writes_results(tmp_path):
    import json
    from stableflow.examples.rotating_jet import main

    output_dir = tmp_path / "out"
    main(["--size", "8", "--steps", "2", "--output-dir", str(output_dir)])

    with open(output_dir / "metrics.json") as f:
        metrics = json.load(f)
    assert metrics["step"] == 2
    assert metrics["total_density"] >= 0.0

    saved = ConfigManager().load(str(output_dir / "config.yaml"))
    assert saved.size == 8
    assert saved.output_dir == str(output_dir)
