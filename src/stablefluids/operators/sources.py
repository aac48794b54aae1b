"""Additive source injection and density decay."""

import numpy as np

from ..grid import Field
from ..kernels import fade
from ..schemes import ExecutionScheme

DENSITY_MIN = 0.0
DENSITY_MAX = 255.0


def add_source(scheme: ExecutionScheme, field: Field, source: np.ndarray):
    """field += source over the whole padded grid (ghosts included)."""
    if source.shape != field.data.shape:
        raise ValueError(
            f"Source shape {source.shape} does not match field '{field.name}' {field.data.shape}"
        )
    np.add(field.data, source, out=scheme.target(field))
    scheme.commit(field)


def decay(scheme: ExecutionScheme, x: Field, amount: float):
    """Subtract ``amount`` from every cell of ``x`` and clamp to [0, 255]."""
    fade(scheme.target(x), x.data, amount, DENSITY_MIN, DENSITY_MAX)
    scheme.commit(x)
