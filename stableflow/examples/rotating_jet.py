"""
Headless rotating-jet driver.

A jet near the top of the domain sweeps back and forth while density noise
is sprinkled everywhere and slowly decays. Each frame carries the previous
state into the input slots, injects sources there, then advances velocity
and density.
"""

import argparse
import json
import logging
import math
from typing import Optional

import numpy as np

from stableflow.core.eulerian.solver import StableFluidSolver
from stableflow.configs.settings import SolverConfig, ConfigManager
from stableflow.configs.presets import get_preset
from stableflow.utils.error_handling import (
    ConfigurationError,
    PhysicsError,
    SolverError,
    handle_simulation_error
)
from stableflow.utils.logging import setup_logging, SimulationLogger, Timer
from stableflow.utils.math_helpers import smoothstep

JET_X = 0.0
JET_Y = 0.45
JET_RADIUS = 0.25
JET_CORE = 0.125
NOISE_RATE = 0.05
DECAY = 0.99

def clamp_dt(dt: float, config: SolverConfig) -> float:
    return min(config.max_time_step, max(config.min_time_step, dt))

def inject_sources(solver: StableFluidSolver, time_ms: float, rng: np.random.Generator):
    """Add the jet and the density noise, then decay the inputs"""
    acceleration = 0.0001 * (math.sin(time_ms / 1000 / 10) * 0.5 + 0.5)
    jet_angle = math.sin(-time_ms / 1000 * 2) - math.pi / 2
    c = math.cos(jet_angle)
    s = math.sin(jet_angle)

    def jet(x, y, i, j):
        return smoothstep(JET_RADIUS, JET_CORE, math.hypot(x - JET_X, y - JET_Y)) * acceleration

    solver.add_source_from_function(solver.vx_prev, 1, lambda x, y, i, j: jet(x, y, i, j) * c)
    solver.add_source_from_function(solver.vy_prev, 1, lambda x, y, i, j: jet(x, y, i, j) * s)

    noise = rng.random(solver.area_pad) * NOISE_RATE
    solver.add_source(solver.density_prev, noise, 1)

    density_prev = solver.density_prev
    density_prev *= DECAY
    density_prev -= NOISE_RATE / 2
    np.maximum(density_prev, 0, out=density_prev)
    solver.vx_prev[:] *= DECAY
    solver.vy_prev[:] *= DECAY

def run(config: SolverConfig,
        steps: Optional[int] = None,
        seed: int = 0,
        report_every: int = 10) -> StableFluidSolver:
    """
    Run the rotating jet for a number of frames

    Args:
        config: Solver configuration
        steps: Number of frames, defaults to config.max_steps
        seed: Seed of the density noise
        report_every: Frames between progress reports

    Returns:
        Solver holding the final state

    Raises:
        SolverError: If a field becomes non-finite or unbounded
    """
    ConfigManager(config).require_valid()
    if steps is None:
        steps = config.max_steps
    if steps < 0:
        raise ConfigurationError(f"Number of frames must not be negative, got {steps}",
                                 details={'steps': steps})

    solver = StableFluidSolver.from_config(config)
    rng = np.random.default_rng(seed)
    progress = SimulationLogger(stream=None)
    progress.start_simulation(steps)

    time_ms = 0.0
    try:
        with Timer("rotating jet"):
            for step in range(1, steps + 1):
                dt = clamp_dt(config.time_step, config)
                time_ms += dt

                solver.swap_all()
                inject_sources(solver, time_ms, rng)

                solver.velocity_step(dt, config.viscosity)
                solver.density_step(dt, config.diffusivity)

                if step % report_every == 0 or step == steps:
                    try:
                        solver.check_stability()
                    except PhysicsError as e:
                        raise SolverError(
                            f"Rotating jet diverged by step {step}",
                            details={'step': step, **e.details}
                        ) from e
                    progress.update_progress(
                        step, f"net density {solver.total_density():.4f}"
                    )
    except Exception as e:
        handle_simulation_error(e, progress.logger)
        progress.end_simulation(success=False)
        raise

    progress.end_simulation()
    return solver

def save_results(solver: StableFluidSolver, config: SolverConfig) -> str:
    """
    Write the effective configuration and the final metrics to config.output_dir

    Returns:
        Path of the metrics file
    """
    manager = ConfigManager(config)
    manager.create_output_dirs()
    manager.save(manager.get_output_path("config.yaml"))

    metrics_path = manager.get_output_path("metrics.json")
    with open(metrics_path, "w") as f:
        json.dump(solver.get_state()['metrics'], f, indent=4)
    return metrics_path

def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the stableflow rotating jet")
    parser.add_argument("--config", type=str, help="Path to a YAML or JSON configuration file")
    parser.add_argument("--preset", type=str, default="rotating_jet", help="Preset name")
    parser.add_argument("--steps", type=int, help="Number of frames")
    parser.add_argument("--size", type=int, help="Grid resolution")
    parser.add_argument("--seed", type=int, default=0, help="Noise seed")
    parser.add_argument("--output-dir", type=str, help="Directory receiving config.yaml and metrics.json")
    args = parser.parse_args(argv)

    config = get_preset(args.preset)
    if args.config:
        config = ConfigManager(config).load(args.config)
    if args.size:
        config.size = args.size
    if args.output_dir:
        config.output_dir = args.output_dir

    setup_logging(getattr(logging, config.log_level.upper()))
    solver = run(config, steps=args.steps, seed=args.seed)

    logger = logging.getLogger(__name__)
    metrics = solver.get_state()['metrics']
    for name, value in metrics.items():
        logger.info(f"  {name}: {value}")
    logger.info(f"Saved results to {save_results(solver, config)}")

if __name__ == "__main__":
    main()
