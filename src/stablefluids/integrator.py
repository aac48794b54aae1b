"""Stable-fluids integrator.

One tick:
1. forcing writes additive sources, which are added to x, u and v
2. velocity step: diffuse, project, self-advect, project
3. density step: diffuse, advect by the final velocity
4. decay of density, clamped to [0, 255]
"""

import logging

import numpy as np

from .base import FluidSolver
from .datastructures import Parameters, SimulationState
from .forcing import Forcing, SourceBuffers, make_forcing
from .grid import BoundaryKind
from .operators import add_source, advect, decay, diffuse, project
from .schemes import make_scheme

log = logging.getLogger(__name__)


class StableFluidsSolver(FluidSolver):
    """Stable-fluids solver on a padded N x N grid.

    Parameters
    ----------
    params : Parameters, optional
        Full configuration. If omitted, it is built from ``kwargs``.
    forcing : Forcing or str, optional
        Forcing collaborator, or a forcing mode name. Defaults to
        ``params.forcing``.
    **kwargs
        Passed to :class:`Parameters` when ``params`` is None.
    """

    Parameters = Parameters

    def __init__(self, params=None, forcing=None, **kwargs):
        if isinstance(forcing, Forcing):
            if params is None:
                kwargs["forcing"] = forcing.name
        elif forcing is not None:
            kwargs["forcing"] = forcing
            forcing = None
        super().__init__(params, **kwargs)

        self.forcing = forcing if forcing is not None else make_forcing(self.params.forcing, n=self.params.N)
        self.scheme = make_scheme(self.params.scheme)
        self.state = SimulationState.allocate(self.params.N, self.scheme)
        self.sources = SourceBuffers.allocate(self.params.N)

        log.info(
            f"Allocated {len(self.state.pool)} buffers for N={self.params.N} "
            f"({self.scheme.name} scheme, {type(self.forcing).__name__})"
        )

    @property
    def N(self) -> int:
        return self.params.N

    @property
    def density(self) -> np.ndarray:
        """Read-only view of the padded density array."""
        view = self.state.x.data.view()
        view.flags.writeable = False
        return view

    def reset(self):
        """Zero every field and restart the tick counter."""
        self.state.reset()
        self.sources.clear()
        self.tick = 0

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def apply_forcing(self):
        self.sources.clear()
        self.forcing(self.sources, self.params.source_density, self.tick)
        if self.sources.is_empty():
            return
        add_source(self.scheme, self.state.x, self.sources.density)
        add_source(self.scheme, self.state.u, self.sources.u)
        add_source(self.scheme, self.state.v, self.sources.v)

    def velocity_step(self):
        s, st, p = self.scheme, self.state, self.params

        diffuse(s, st.u0, st.u, p.viscosity, p.dt, BoundaryKind.REFLECT_HORIZONTAL)
        diffuse(s, st.v0, st.v, p.viscosity, p.dt, BoundaryKind.REFLECT_VERTICAL)
        # (u, v) is free until advection, so it doubles as pressure/divergence
        project(s, st.u0, st.v0, st.u, st.v)

        advect(s, st.u, st.u0, st.u0, st.v0, p.dt, BoundaryKind.REFLECT_HORIZONTAL)
        advect(s, st.v, st.v0, st.u0, st.v0, p.dt, BoundaryKind.REFLECT_VERTICAL)
        project(s, st.u, st.v, st.u0, st.v0)

    def density_step(self):
        s, st, p = self.scheme, self.state, self.params

        diffuse(s, st.x0, st.x, p.diffusion, p.dt, BoundaryKind.CONTINUITY)
        advect(s, st.x, st.x0, st.u, st.v, p.dt, BoundaryKind.CONTINUITY)

    def step(self):
        self.apply_forcing()
        self.velocity_step()
        self.density_step()
        decay(self.scheme, self.state.x, self.params.density_decay)
        self.tick += 1
        return self.state.x.data
