from .solver import StableFluidSolver, create

__all__ = ['StableFluidSolver', 'create']
