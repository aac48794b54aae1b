"""Data structures for solver configuration, state and results.

Structure:
- Parameters: Input configuration (logged to MLflow at start)
- SimulationState: Every grid field the solver owns
- Metrics: Output results (logged to MLflow at end)
- Fields: Interior solution snapshot
- TimeSeries: Per-tick diagnostics
"""

import time
from dataclasses import asdict, dataclass, fields as dc_fields
from typing import List

import numpy as np
import pandas as pd

from .forcing import FORCINGS, CompositeForcing
from .grid import BufferPool, Field
from .schemes import SCHEMES

FORCING_MODES = sorted(FORCINGS) + [CompositeForcing.name]


# ========================================================
# Parameters (Input Configuration)
# ========================================================


@dataclass
class Parameters:
    """Solver parameters, set once at startup."""

    N: int = 128
    dt: float = 1.0 / 60.0
    diffusion: float = 0.0  # kappa, density diffusion rate
    viscosity: float = 0.0  # nu, velocity diffusion rate
    density_decay: float = 0.02
    source_density: float = 10.0
    max_ticks: int = 600
    scheme: str = "sequential"
    forcing: str = "none"
    method: str = "stable-fluids"

    def __post_init__(self):
        if int(self.N) != self.N or self.N < 1:
            raise ValueError(f"Grid resolution N must be a positive integer, got {self.N}")
        self.N = int(self.N)
        if self.dt <= 0:
            raise ValueError(f"Time step dt must be positive, got {self.dt}")
        for name in ("diffusion", "viscosity", "density_decay", "source_density"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.max_ticks < 0:
            raise ValueError(f"max_ticks must be non-negative, got {self.max_ticks}")
        if self.scheme not in SCHEMES:
            raise ValueError(f"Unknown execution scheme '{self.scheme}', expected one of {sorted(SCHEMES)}")
        if self.forcing not in FORCING_MODES:
            raise ValueError(f"Unknown forcing mode '{self.forcing}', expected one of {FORCING_MODES}")

    def to_dataframe(self):
        return pd.DataFrame([asdict(self)])

    def to_mlflow(self) -> dict:
        return asdict(self)


# ========================================================
# Simulation State (owned by the solver)
# ========================================================


@dataclass
class SimulationState:
    """All grid fields of one simulation.

    (u, v) is the velocity pair and x the density; u0, v0 and x0 are the
    previous-step buffers, which also serve as pressure/divergence scratch
    during projection.
    """

    pool: BufferPool
    u: Field
    v: Field
    u0: Field
    v0: Field
    x: Field
    x0: Field

    @classmethod
    def allocate(cls, n: int, scheme):
        """Allocate every field, zeroed, with the buffers ``scheme`` needs."""
        pool = BufferPool(n)
        return cls(
            pool=pool,
            # Velocity
            u=scheme.allocate(pool, "u"),
            v=scheme.allocate(pool, "v"),
            u0=scheme.allocate(pool, "u0"),
            v0=scheme.allocate(pool, "v0"),
            # Density
            x=scheme.allocate(pool, "x"),
            x0=scheme.allocate(pool, "x0"),
        )

    @property
    def n(self) -> int:
        return self.pool.n

    def fields(self):
        return [self.u, self.v, self.u0, self.v0, self.x, self.x0]

    def buffer_swaps(self) -> int:
        return sum(f.swaps for f in self.fields())

    def reset(self):
        for f in self.fields():
            f.fill(0.0)
            if f.double_buffered:
                f.next.fill(0.0)


# ========================================================
# Metrics (Output Results)
# ========================================================


@dataclass
class Metrics:
    """Solver metrics - output results computed after running."""

    ticks: int = 0
    wall_time_seconds: float = 0.0
    ticks_per_second: float = 0.0
    total_density: float = 0.0
    max_density: float = 0.0
    max_speed: float = 0.0
    max_divergence: float = 0.0
    kinetic_energy: float = 0.0
    passes: int = 0
    buffer_swaps: int = 0

    def to_dataframe(self):
        return pd.DataFrame([asdict(self)])

    def to_mlflow(self) -> dict:
        return {k: float(v) for k, v in asdict(self).items()}


# ========================================================
# Fields (Spatial Solution Data)
# ========================================================


@dataclass
class Fields:
    """Interior solution fields on cell centres (x, y) in the unit square."""

    x: np.ndarray
    y: np.ndarray
    u: np.ndarray
    v: np.ndarray
    density: np.ndarray

    @classmethod
    def from_state(cls, state: SimulationState):
        n = state.n
        centres = (np.arange(1, n + 1) - 0.5) / n
        X, Y = np.meshgrid(centres, centres, indexing="ij")
        return cls(
            x=X.ravel(),
            y=Y.ravel(),
            u=state.u.interior.ravel().copy(),
            v=state.v.interior.ravel().copy(),
            density=state.x.interior.ravel().copy(),
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with one row per interior cell."""
        return pd.DataFrame(asdict(self))


# ========================================================
# Time Series (Per-tick Diagnostics)
# ========================================================


@dataclass
class TimeSeries:
    """Diagnostics history (one value per recorded tick)."""

    tick: List[int]
    total_density: List[float]
    max_speed: List[float]
    max_divergence: List[float]
    kinetic_energy: List[float]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(asdict(self))

    def to_mlflow_batch(self) -> list:
        """Metric entities for MlflowClient.log_batch, stepped by tick."""
        from mlflow.entities import Metric

        timestamp = int(time.time() * 1000)
        batch = []
        for f in dc_fields(self):
            if f.name == "tick":
                continue
            for step, value in zip(self.tick, getattr(self, f.name)):
                batch.append(
                    Metric(key=f"ts_{f.name}", value=float(value), timestamp=timestamp, step=int(step))
                )
        return batch
