"""Stable-fluids 2D solver framework.

Real-time incompressible flow of a smoke density on a padded N x N grid:
implicit diffusion by fixed-count relaxation, semi-Lagrangian advection and
Hodge projection, run under a sequential or a double-buffered scheme.

Solver Hierarchy:
-----------------
FluidSolver (abstract base - tick loop, diagnostics, results)
└── StableFluidsSolver (forcing → velocity step → density step → decay)

Execution schemes:
------------------
ExecutionScheme
├── InPlaceSweep ("sequential", Gauss-Seidel)
└── DoubleBufferedSweep ("parallel", Jacobi with buffer swaps)
"""

from .base import FluidSolver
from .datastructures import Fields, Metrics, Parameters, SimulationState, TimeSeries
from .forcing import (
    CompositeForcing,
    FanForcing,
    Forcing,
    Impulse,
    ImpulseForcing,
    NoForcing,
    PointerForcing,
    SourceBuffers,
    make_forcing,
)
from .grid import BoundaryKind, BufferPool, Field
from .integrator import StableFluidsSolver
from .schemes import (
    RELAXATION_SWEEPS,
    DoubleBufferedSweep,
    ExecutionScheme,
    InPlaceSweep,
    make_scheme,
)

__all__ = [
    # Base classes
    "FluidSolver",
    # Configurations
    "Parameters",
    # Data structures
    "SimulationState",
    "Metrics",
    "Fields",
    "TimeSeries",
    # Grid
    "BufferPool",
    "Field",
    "BoundaryKind",
    # Schemes
    "ExecutionScheme",
    "InPlaceSweep",
    "DoubleBufferedSweep",
    "make_scheme",
    "RELAXATION_SWEEPS",
    # Forcing
    "Forcing",
    "SourceBuffers",
    "NoForcing",
    "FanForcing",
    "PointerForcing",
    "Impulse",
    "ImpulseForcing",
    "CompositeForcing",
    "make_forcing",
    # Concrete solvers
    "StableFluidsSolver",
]
