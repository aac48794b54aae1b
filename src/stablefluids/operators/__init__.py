"""Solver stages: diffusion, advection, projection, sources and decay."""

from .advection import advect
from .diffusion import diffuse
from .projection import project
from .sources import DENSITY_MAX, DENSITY_MIN, add_source, decay

__all__ = [
    "diffuse",
    "advect",
    "project",
    "add_source",
    "decay",
    "DENSITY_MIN",
    "DENSITY_MAX",
]
