import logging
import numpy as np
from typing import Callable, Dict, Optional

from ..numerics.grid import PaddedGrid, add_source, add_source_from_function
from ..numerics.buffers import BufferPair
from ..numerics.boundary import BoundaryMode, boundary_mode, enforce_boundary
from ..numerics.solvers import DEFAULT_ITERATIONS, diffuse, project, compute_divergence
from ..numerics.advection import advect
from ...configs.settings import SolverConfig, ConfigManager
from ...utils.error_handling import (
    ConfigurationError,
    check_grid_size,
    check_array_bounds,
    check_numerical_stability
)

SCALAR = int(BoundaryMode.SCALAR)
VELOCITY_X = int(BoundaryMode.VELOCITY_X)
VELOCITY_Y = int(BoundaryMode.VELOCITY_Y)

SourceFunction = Callable[[float, float, int, int], float]

class StableFluidSolver:
    """
    Stable-fluids solver on a periodic N x N grid.

    Density and both velocity components are each held as a current/previous
    pair of flat padded buffers. Sources go into the previous buffers before a
    step; the step leaves the new state in the current buffers.
    """

    def __init__(self,
                 size: int,
                 iterations: int = DEFAULT_ITERATIONS,
                 dtype=np.float32):
        """
        Allocate all field buffers

        Args:
            size: Interior grid resolution N
            iterations: Gauss-Seidel sweeps used by diffuse and project
            dtype: Buffer element type
        """
        self.logger = logging.getLogger(__name__)

        size = check_grid_size(size)
        if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)) or iterations <= 0:
            raise ConfigurationError(
                f"Iterations must be a positive integer, got {iterations}",
                details={'iterations': iterations}
            )

        self.grid = PaddedGrid(size)
        self.size = size
        self.size_pad = self.grid.size_pad
        self.area_pad = self.grid.area_pad
        self.cell_width = self.grid.cell_width
        self.iterations = int(iterations)
        self.dtype = np.dtype(dtype)

        self._density = BufferPair.zeros(self.area_pad, self.dtype)
        self._vx = BufferPair.zeros(self.area_pad, self.dtype)
        self._vy = BufferPair.zeros(self.area_pad, self.dtype)

        # Projection scratch
        self.divergence = self.grid.allocate(self.dtype)
        self.potential = self.grid.allocate(self.dtype)

        self.step_count = 0

        self.logger.info(
            f"Created {size}x{size} solver ({self.area_pad} cells padded, "
            f"{self.iterations} iterations, {self.dtype.name})"
        )

    @classmethod
    def from_config(cls, config: SolverConfig) -> "StableFluidSolver":
        """Build a solver from a validated configuration"""
        ConfigManager(config).require_valid()
        return cls(config.size, iterations=config.iterations, dtype=config.dtype)

    # Field access

    @property
    def density(self) -> np.ndarray:
        return self._density.current

    @property
    def density_prev(self) -> np.ndarray:
        return self._density.previous

    @property
    def vx(self) -> np.ndarray:
        return self._vx.current

    @property
    def vx_prev(self) -> np.ndarray:
        return self._vx.previous

    @property
    def vy(self) -> np.ndarray:
        return self._vy.current

    @property
    def vy_prev(self) -> np.ndarray:
        return self._vy.previous

    def index(self, i: int, j: int) -> int:
        """Linear index of cell (i, j)"""
        return self.grid.index(i, j)

    def interior(self, field: np.ndarray) -> np.ndarray:
        """2D view of a field's interior, indexed [j - 1, i - 1]"""
        return self.grid.interior(field)

    def swap_density(self):
        self._density.swap()

    def swap_vx(self):
        self._vx.swap()

    def swap_vy(self):
        self._vy.swap()

    def swap_all(self):
        """
        Make the last state the input of the next step.

        Steps read the previous slots and leave their result in the current
        slots, so a driver carrying state from frame to frame swaps every
        pair before injecting sources into the previous slots.
        """
        self._density.swap()
        self._vx.swap()
        self._vy.swap()

    def reset(self):
        """Zero every buffer in place"""
        for pair in (self._density, self._vx, self._vy):
            pair.current.fill(0)
            pair.previous.fill(0)
        self.divergence.fill(0)
        self.potential.fill(0)
        self.step_count = 0

    # Sources

    def add_source(self, x: np.ndarray, s: np.ndarray, dt: float):
        """Accumulate s * dt into x over the whole padded buffer"""
        add_source(x, s, dt)

    def add_source_from_function(self, x: np.ndarray, dt: float, fn: SourceFunction):
        """Accumulate fn(cell_x, cell_y, i, j) * dt into every padded cell of x"""
        add_source_from_function(x, dt, fn, self.size)

    # Kernels bound to this grid

    def enforce_boundary(self, bound: int, x: np.ndarray):
        enforce_boundary(boundary_mode(bound), x, self.size)

    def diffuse(self, bound: int, x: np.ndarray, x_prev: np.ndarray, diffusivity: float, dt: float):
        diffuse(boundary_mode(bound), x, x_prev, float(diffusivity), float(dt), self.size, self.iterations)

    def advect(self, bound: int, d: np.ndarray, d_prev: np.ndarray,
               vx: np.ndarray, vy: np.ndarray, dt: float):
        advect(boundary_mode(bound), d, d_prev, vx, vy, float(dt), self.size)

    def project(self, vx: np.ndarray, vy: np.ndarray):
        """Remove the divergent part of (vx, vy) using the solver's scratch buffers"""
        project(vx, vy, self.potential, self.divergence, self.size, self.iterations)

    # Steps

    def density_step(self, dt: float, diffusivity: float):
        """
        Diffuse then advect the density through the current velocity.

        On return density holds the new state and density_prev holds the
        diffused, not yet advected, intermediate.
        """
        self.diffuse(SCALAR, self.density, self.density_prev, diffusivity, dt)
        self.swap_density()
        self.advect(SCALAR, self.density, self.density_prev, self.vx, self.vy, dt)

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Density step dt={dt}: total density {self.total_density():.6g}")

    def velocity_step(self, dt: float, viscosity: float):
        """
        Diffuse, project, self-advect and project the velocity.

        Diffusion and advection can each introduce divergence, so the
        velocity is projected after both. On return vx/vy hold the new state
        and vx_prev/vy_prev hold the diffused and projected intermediate.
        """
        self.diffuse(VELOCITY_X, self.vx, self.vx_prev, viscosity, dt)
        self.diffuse(VELOCITY_Y, self.vy, self.vy_prev, viscosity, dt)
        self.project(self.vx, self.vy)

        self.swap_vx()
        self.swap_vy()

        self.advect(VELOCITY_X, self.vx, self.vx_prev, self.vx_prev, self.vy_prev, dt)
        self.advect(VELOCITY_Y, self.vy, self.vy_prev, self.vx_prev, self.vy_prev, dt)
        self.project(self.vx, self.vy)

        self.step_count += 1

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Velocity step {self.step_count} dt={dt}: "
                f"max divergence {float(np.max(np.abs(self.compute_divergence()))):.6g}"
            )

    # Diagnostics

    def compute_divergence(self) -> np.ndarray:
        """Divergence of the current velocity; padding cells are zero"""
        div = self.grid.allocate(np.float64)
        compute_divergence(self.vx, self.vy, div, self.size)
        return div

    def total_density(self) -> float:
        """Sum of density over the interior cells"""
        return float(np.sum(self.interior(self.density), dtype=np.float64))

    def check_stability(self, limit: float = 1e6):
        """Raise PhysicsError if any current field is non-finite or exceeds limit"""
        check_array_bounds(self.density, "density", limit)
        check_array_bounds(self.vx, "vx", limit)
        check_array_bounds(self.vy, "vy", limit)
        check_numerical_stability(self.total_density(), "total density", limit * self.area_pad)

    def get_state(self) -> Dict:
        """Get current simulation state"""
        speed = np.hypot(self.interior(self.vx), self.interior(self.vy))
        divergence = self.interior(self.compute_divergence())
        return {
            'density': self.density.copy(),
            'vx': self.vx.copy(),
            'vy': self.vy.copy(),
            'metrics': {
                'step': self.step_count,
                'total_density': self.total_density(),
                'max_density': float(np.max(self.interior(self.density))),
                'max_velocity': float(np.max(speed)),
                'max_divergence': float(np.max(np.abs(divergence)))
            }
        }

def create(size: int, config: Optional[SolverConfig] = None) -> StableFluidSolver:
    """
    Create a solver with zeroed buffers

    Args:
        size: Interior grid resolution N
        config: Optional configuration supplying iterations and dtype; its
            own size field is ignored in favour of the argument

    Returns:
        Solver
    """
    if config is None:
        return StableFluidSolver(size)
    ConfigManager(config).require_valid()
    return StableFluidSolver(size, iterations=config.iterations, dtype=config.dtype)
