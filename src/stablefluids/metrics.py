"""Diagnostics on padded simulation fields.

All quantities are evaluated over interior cells only; ghost cells carry
boundary copies and are excluded.
"""

from __future__ import annotations

import numpy as np

from .grid import Field


def _array(f) -> np.ndarray:
    return f.data if isinstance(f, Field) else np.asarray(f)


# -----------------------------------------------------------------------------
# Fields
# -----------------------------------------------------------------------------


def divergence_field(u, v) -> np.ndarray:
    """Central-difference divergence 0.5*N*(du/di + dv/dj) on the interior."""
    u, v = _array(u), _array(v)
    n = u.shape[0] - 2
    return 0.5 * n * ((u[2:, 1:-1] - u[:-2, 1:-1]) + (v[1:-1, 2:] - v[1:-1, :-2]))


def speed_field(u, v) -> np.ndarray:
    u, v = _array(u), _array(v)
    return np.hypot(u[1:-1, 1:-1], v[1:-1, 1:-1])


def vorticity_field(u, v) -> np.ndarray:
    """Central-difference vorticity dv/dx - du/dy on the interior."""
    u, v = _array(u), _array(v)
    n = u.shape[0] - 2
    dv_dx = 0.5 * n * (v[2:, 1:-1] - v[:-2, 1:-1])
    du_dy = 0.5 * n * (u[1:-1, 2:] - u[1:-1, :-2])
    return dv_dx - du_dy


# -----------------------------------------------------------------------------
# Scalars
# -----------------------------------------------------------------------------


def max_divergence(u, v) -> float:
    return float(np.max(np.abs(divergence_field(u, v))))


def divergence_l2(u, v) -> float:
    return float(np.linalg.norm(divergence_field(u, v)))


def max_speed(u, v) -> float:
    return float(np.max(speed_field(u, v)))


def kinetic_energy(u, v) -> float:
    """E = 0.5 * sum(u^2 + v^2) * h^2 over the unit square."""
    u, v = _array(u), _array(v)
    n = u.shape[0] - 2
    ui, vi = u[1:-1, 1:-1], v[1:-1, 1:-1]
    return 0.5 * float(np.sum(ui * ui + vi * vi)) / (n * n)


def total_density(x) -> float:
    """Sum of interior density."""
    return float(np.sum(_array(x)[1:-1, 1:-1]))


def max_density(x) -> float:
    return float(np.max(_array(x)[1:-1, 1:-1]))


def diagnostics(state) -> dict:
    """All per-tick diagnostics of a SimulationState."""
    return {
        "total_density": total_density(state.x),
        "max_speed": max_speed(state.u, state.v),
        "max_divergence": max_divergence(state.u, state.v),
        "kinetic_energy": kinetic_energy(state.u, state.v),
    }
