"""Implicit diffusion by fixed-iteration relaxation."""

from ..grid import Field
from ..schemes import ExecutionScheme, RELAXATION_SWEEPS
from .validation import require_distinct, require_resolution


def diffuse(scheme: ExecutionScheme, x: Field, x0: Field, rate: float, dt: float, kind):
    """Diffuse ``x0`` into ``x`` with backward Euler.

    Solves x - a*lap(x) = x0 with a = dt*rate*N^2 using exactly
    RELAXATION_SWEEPS sweeps, starting from the current contents of ``x``.
    A rate of 0 reduces every sweep to a copy of ``x0``.

    Parameters
    ----------
    scheme : ExecutionScheme
        Sequential or double-buffered pass strategy.
    x : Field
        Target field, overwritten.
    x0 : Field
        Source field, read only.
    rate : float
        Diffusion (or viscosity) coefficient.
    dt : float
        Time step.
    kind : BoundaryKind
        Boundary condition enforced on ``x`` after every sweep.
    """
    n = require_resolution(x, x0)
    require_distinct(x, x0, "diffuse")

    a = dt * rate * n * n
    scheme.relax(x, x0, a, 1.0 + 4.0 * a, kind, sweeps=RELAXATION_SWEEPS)
