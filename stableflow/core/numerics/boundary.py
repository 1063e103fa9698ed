from enum import IntEnum
from numba import njit
from .grid import index
from ...utils.error_handling import BoundaryError

class BoundaryMode(IntEnum):
    """
    Kind of field a boundary pass is applied to.

    The periodic boundary treats every mode alike. A reflective wall would
    negate the normal component, i.e. VELOCITY_X on the left/right walls and
    VELOCITY_Y on the top/bottom walls.
    """
    SCALAR = 0
    VELOCITY_X = 1
    VELOCITY_Y = 2

def boundary_mode(bound) -> int:
    """Check bound names a BoundaryMode and return it as a plain int for the kernels"""
    try:
        return int(BoundaryMode(bound))
    except ValueError as e:
        raise BoundaryError(f"Unknown boundary mode: {bound!r}", details={'bound': bound}) from e

@njit
def enforce_boundary(bound, x, size):
    """
    Refill the padding ring so the field wraps around on both axes.

    Each padding cell on an axis takes the average of the first and last
    interior cells of that row/column. Corners take the average of their two
    orthogonal padding neighbours.

    Args:
        bound: BoundaryMode value, unused by the periodic topology
        x: Flat padded field updated in place
        size: Interior grid resolution
    """
    n = size
    size_pad = size + 2

    for i in range(1, n + 1):
        average = 0.5 * (x[index(1, i, size_pad)] + x[index(n, i, size_pad)])
        x[index(0, i, size_pad)] = average
        x[index(n + 1, i, size_pad)] = average

        average = 0.5 * (x[index(i, 1, size_pad)] + x[index(i, n, size_pad)])
        x[index(i, 0, size_pad)] = average
        x[index(i, n + 1, size_pad)] = average

    x[index(0, 0, size_pad)] = 0.5 * (
        x[index(1, 0, size_pad)] + x[index(0, 1, size_pad)])
    x[index(0, n + 1, size_pad)] = 0.5 * (
        x[index(1, n + 1, size_pad)] + x[index(0, n, size_pad)])
    x[index(n + 1, 0, size_pad)] = 0.5 * (
        x[index(n, 0, size_pad)] + x[index(n + 1, 1, size_pad)])
    x[index(n + 1, n + 1, size_pad)] = 0.5 * (
        x[index(n, n + 1, size_pad)] + x[index(n + 1, n, size_pad)])
