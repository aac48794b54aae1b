"""Hodge projection onto divergence-free velocity fields."""

from ..grid import BoundaryKind, Field
from ..kernels import divergence, subtract_gradient
from ..schemes import ExecutionScheme, RELAXATION_SWEEPS
from .validation import require_distinct, require_resolution


def project(scheme: ExecutionScheme, u: Field, v: Field, p: Field, div: Field):
    """Remove the divergent part of (u, v) in place.

    Steps:
    1. div = -0.5*N*(du + dv) on interior cells, p = 0
    2. continuity boundaries on div and p
    3. RELAXATION_SWEEPS sweeps of lap(p) = div (a=1, c=4)
    4. u -= 0.5*dp/di / N, v -= 0.5*dp/dj / N
    5. reflective boundaries on u and v

    ``p`` and ``div`` are scratch and are overwritten.
    """
    require_resolution(u, v, p, div)
    fields = (u, v, p, div)
    for i, a in enumerate(fields):
        for b in fields[i + 1:]:
            require_distinct(a, b, "project")

    # div has no self-dependency, so it is written in its current buffer
    divergence(div.data, u.data, v.data)
    p.fill(0.0)
    scheme.enforce(div, BoundaryKind.CONTINUITY)
    scheme.enforce(p, BoundaryKind.CONTINUITY)

    scheme.relax(p, div, 1.0, 4.0, BoundaryKind.CONTINUITY, sweeps=RELAXATION_SWEEPS)

    subtract_gradient(scheme.target(u), u.data, p.data, axis=0)
    scheme.commit(u)
    subtract_gradient(scheme.target(v), v.data, p.data, axis=1)
    scheme.commit(v)

    scheme.enforce(u, BoundaryKind.REFLECT_HORIZONTAL)
    scheme.enforce(v, BoundaryKind.REFLECT_VERTICAL)
