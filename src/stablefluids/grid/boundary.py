"""Ghost-ring boundary conditions for padded grid fields."""

from enum import IntEnum

import numpy as np


class BoundaryKind(IntEnum):
    """How a field's ghost ring relates to its interior.

    CONTINUITY          copy the adjacent interior value (density, pressure)
    REFLECT_HORIZONTAL  negate across the i=0 and i=N+1 walls (u component)
    REFLECT_VERTICAL    negate across the j=0 and j=N+1 walls (v component)
    """

    CONTINUITY = 0
    REFLECT_HORIZONTAL = 1
    REFLECT_VERTICAL = 2


def as_boundary_kind(kind) -> BoundaryKind:
    """Validate a boundary kind given as enum member, int code or name."""
    if isinstance(kind, BoundaryKind):
        return kind
    if isinstance(kind, str):
        try:
            return BoundaryKind[kind.upper()]
        except KeyError:
            raise ValueError(f"Unknown boundary kind {kind!r}") from None
    try:
        return BoundaryKind(kind)
    except ValueError:
        raise ValueError(f"Unknown boundary kind {kind!r}") from None


def fill_boundary(src: np.ndarray, dst: np.ndarray, kind: BoundaryKind):
    """Write the ghost ring of ``dst`` from the interior of ``src``.

    ``src`` and ``dst`` may be the same buffer (in-place enforcement). When
    they differ, the interior is carried over so that ``dst`` holds a
    complete field, and ``src`` is only read.
    """
    n = src.shape[0] - 2
    if dst is not src:
        dst[1:-1, 1:-1] = src[1:-1, 1:-1]

    sx = -1.0 if kind == BoundaryKind.REFLECT_HORIZONTAL else 1.0
    sy = -1.0 if kind == BoundaryKind.REFLECT_VERTICAL else 1.0

    # Edges, k = 1..N
    dst[0, 1:-1] = sx * src[1, 1:-1]
    dst[n + 1, 1:-1] = sx * src[n, 1:-1]
    dst[1:-1, 0] = sy * src[1:-1, 1]
    dst[1:-1, n + 1] = sy * src[1:-1, n]

    # Corners average their two edge neighbours
    dst[0, 0] = 0.5 * (dst[1, 0] + dst[0, 1])
    dst[0, n + 1] = 0.5 * (dst[1, n + 1] + dst[0, n])
    dst[n + 1, 0] = 0.5 * (dst[n, 0] + dst[n + 1, 1])
    dst[n + 1, n + 1] = 0.5 * (dst[n, n + 1] + dst[n + 1, n])
