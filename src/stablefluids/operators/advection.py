"""Semi-Lagrangian advection."""

from ..grid import Field, as_boundary_kind
from ..kernels import advect_bilinear
from ..schemes import ExecutionScheme
from .validation import require_distinct, require_resolution


def advect(
    scheme: ExecutionScheme,
    d: Field,
    d0: Field,
    u: Field,
    v: Field,
    dt: float,
    kind,
):
    """Resample ``d0`` along the backward characteristic of (u, v) into ``d``.

    Each interior cell traces back to (i - dt*N*u, j - dt*N*v), clamped to
    [0.5, N+0.5], and interpolates ``d0`` bilinearly there. The transport
    pair may be any velocity fields, including the one being advected.
    """
    kind = as_boundary_kind(kind)
    n = require_resolution(d, d0, u, v)
    require_distinct(d, d0, "advect")
    require_distinct(d, u, "advect")
    require_distinct(d, v, "advect")

    # Target is never read, so the pass writes its current buffer directly
    advect_bilinear(d.data, d0.data, u.data, v.data, dt * n)
    scheme.enforce(d, kind)
