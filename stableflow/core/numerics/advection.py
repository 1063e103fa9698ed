import math
from numba import njit
from .grid import index
from .boundary import enforce_boundary
from ...utils.math_helpers import clamp

@njit
def advect(bound, d, d_prev, vx, vy, dt, size):
    """
    Semi-Lagrangian transport of d_prev through (vx, vy) into d.

    Every interior cell is traced back one time step, the departure point is
    clamped to [0.5, size + 0.5] and d_prev is sampled bilinearly there.
    Sampling backwards keeps the result a convex combination of existing
    values, so the step is stable for any dt.

    Args:
        bound: BoundaryMode value of the transported field
        d: Destination field
        d_prev: Source field, read only
        vx: x-velocity used for the backtrace
        vy: y-velocity used for the backtrace
        dt: Time delta
        size: Interior grid resolution
    """
    size_pad = size + 2
    n = size
    dt0 = dt * n

    for j in range(1, n + 1):
        for i in range(1, n + 1):
            x = clamp(i - dt0 * vx[index(i, j, size_pad)], 0.5, 0.5 + n)
            y = clamp(j - dt0 * vy[index(i, j, size_pad)], 0.5, 0.5 + n)

            i0 = int(math.floor(x))
            i1 = i0 + 1
            j0 = int(math.floor(y))
            j1 = j0 + 1

            s1 = x - i0
            s0 = 1.0 - s1
            t1 = y - j0
            t0 = 1.0 - t1

            d[index(i, j, size_pad)] = (
                s0 * (t0 * d_prev[index(i0, j0, size_pad)] +
                      t1 * d_prev[index(i0, j1, size_pad)]) +
                s1 * (t0 * d_prev[index(i1, j0, size_pad)] +
                      t1 * d_prev[index(i1, j1, size_pad)])
            )

    enforce_boundary(bound, d, size)
