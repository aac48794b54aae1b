"""Padded grid storage and boundary conditions."""

from .boundary import BoundaryKind, as_boundary_kind, fill_boundary
from .field import BufferPool, Field

__all__ = [
    "BufferPool",
    "Field",
    "BoundaryKind",
    "as_boundary_kind",
    "fill_boundary",
]
