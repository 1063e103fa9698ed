from .grid import PaddedGrid, index, add_source, add_source_from_function
from .buffers import BufferPair
from .boundary import BoundaryMode, boundary_mode, enforce_boundary
from .solvers import DEFAULT_ITERATIONS, diffuse, project, compute_divergence
from .advection import advect

__all__ = [
    'PaddedGrid',
    'index',
    'add_source',
    'add_source_from_function',
    'BufferPair',
    'BoundaryMode',
    'boundary_mode',
    'enforce_boundary',
    'DEFAULT_ITERATIONS',
    'diffuse',
    'project',
    'compute_divergence',
    'advect'
]
