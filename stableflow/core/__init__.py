from .eulerian.solver import StableFluidSolver, create
from .numerics import (
    PaddedGrid,
    BufferPair,
    BoundaryMode,
    index,
    add_source,
    add_source_from_function,
    enforce_boundary,
    diffuse,
    advect,
    project,
    compute_divergence
)

__all__ = [
    'StableFluidSolver',
    'create',
    'PaddedGrid',
    'BufferPair',
    'BoundaryMode',
    'index',
    'add_source',
    'add_source_from_function',
    'enforce_boundary',
    'diffuse',
    'advect',
    'project',
    'compute_divergence'
]
