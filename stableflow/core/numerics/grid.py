import numpy as np
from numba import njit
from typing import Callable
from dataclasses import dataclass, field

@njit(inline="always")
def index(i, j, size_pad):
    """Linear index of cell (i, j) in a padded row-major buffer"""
    return i + size_pad * j

@dataclass
class PaddedGrid:
    """N x N interior cells surrounded by a one-cell padding ring"""
    size: int
    size_pad: int = field(init=False)
    area_pad: int = field(init=False)
    cell_width: float = field(init=False)

    def __post_init__(self):
        self.size_pad = self.size + 2
        self.area_pad = self.size_pad ** 2
        self.cell_width = 1.0 / self.size

    def index(self, i: int, j: int) -> int:
        """Linear index of cell (i, j)"""
        return index(i, j, self.size_pad)

    def allocate(self, dtype=np.float32) -> np.ndarray:
        """
        Allocate a zeroed field buffer for this grid

        Args:
            dtype: Element type

        Returns:
            Flat contiguous buffer of length (size + 2) ** 2
        """
        return np.zeros(self.area_pad, dtype=dtype)

    def interior(self, buffer: np.ndarray) -> np.ndarray:
        """2D view of the interior cells, indexed [j - 1, i - 1]"""
        n = self.size
        return buffer.reshape(self.size_pad, self.size_pad)[1:n + 1, 1:n + 1]

def add_source(x: np.ndarray, s: np.ndarray, dt: float) -> None:
    """
    Accumulate a source field into a field over the whole padded buffer

    Args:
        x: Field updated in place
        s: Source field, same shape as x
        dt: Time delta scaling the source
    """
    x += s * dt

def add_source_from_function(x: np.ndarray,
                             dt: float,
                             fn: Callable[[float, float, int, int], float],
                             size: int) -> None:
    """
    Accumulate fn(cell_x, cell_y, i, j) * dt into every padded cell

    Cell coordinates are mapped onto the centered unit square, so the
    interior spans [-0.5, 0.5) on both axes.

    Args:
        x: Field updated in place
        dt: Time delta scaling the source
        fn: Source function of normalized position and cell indices
        size: Interior grid resolution
    """
    size_pad = size + 2
    for j in range(size_pad):
        for i in range(size_pad):
            cell_x = (i - 1) / size - 0.5
            cell_y = (j - 1) / size - 0.5
            x[index(i, j, size_pad)] += fn(cell_x, cell_y, i, j) * dt
