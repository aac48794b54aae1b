"""
Grid-wide kernels on padded (N+2) x (N+2) buffers.

Only interior cells 1..N are written; ghost cells are left to the boundary
pass that follows every kernel. All kernels except ``gauss_seidel_sweep``
read exclusively from their source arrays, so they are safe to run with a
separate destination buffer.
"""

import numpy as np
from numba import njit


@njit(cache=True, fastmath=True, nogil=True)
def gauss_seidel_sweep(x, x0, a, c):
    """One in-place relaxation sweep of x - a*lap(x) = x0.

    Cells updated earlier in the sweep are read back by their neighbours.
    """
    n = x.shape[0] - 2
    inv_c = 1.0 / c
    for j in range(1, n + 1):
        for i in range(1, n + 1):
            x[i, j] = (
                x0[i, j] + a * (x[i - 1, j] + x[i + 1, j] + x[i, j - 1] + x[i, j + 1])
            ) * inv_c


def jacobi_sweep(src, x0, dst, a, c):
    """One relaxation sweep reading neighbours only from ``src``."""
    dst[1:-1, 1:-1] = (
        x0[1:-1, 1:-1]
        + a * (src[:-2, 1:-1] + src[2:, 1:-1] + src[1:-1, :-2] + src[1:-1, 2:])
    ) / c


def advect_bilinear(dst, src, u, v, dt0):
    """Semi-Lagrangian resampling of ``src`` along (u, v) into ``dst``.

    ``dt0`` is dt*N, the time step expressed in cells.
    """
    n = src.shape[0] - 2
    idx = np.arange(1, n + 1, dtype=np.float64)

    x = np.clip(idx[:, None] - dt0 * u[1:-1, 1:-1], 0.5, n + 0.5)
    y = np.clip(idx[None, :] - dt0 * v[1:-1, 1:-1], 0.5, n + 0.5)

    i0 = np.floor(x).astype(np.intp)
    j0 = np.floor(y).astype(np.intp)
    i1 = i0 + 1
    j1 = j0 + 1

    s1 = x - i0
    s0 = 1.0 - s1
    t1 = y - j0
    t0 = 1.0 - t1

    dst[1:-1, 1:-1] = s0 * (t0 * src[i0, j0] + t1 * src[i0, j1]) + s1 * (
        t0 * src[i1, j0] + t1 * src[i1, j1]
    )


def divergence(dst, u, v):
    """Scaled negative central divergence, -0.5*N*(du/di + dv/dj)."""
    n = u.shape[0] - 2
    dst[1:-1, 1:-1] = (
        -0.5 * n * ((u[2:, 1:-1] - u[:-2, 1:-1]) + (v[1:-1, 2:] - v[1:-1, :-2]))
    )


def subtract_gradient(dst, src, p, axis):
    """dst = src - 0.5*dp/N along ``axis`` (0 for u, 1 for v)."""
    n = src.shape[0] - 2
    if axis == 0:
        dp = p[2:, 1:-1] - p[:-2, 1:-1]
    else:
        dp = p[1:-1, 2:] - p[1:-1, :-2]
    dst[1:-1, 1:-1] = src[1:-1, 1:-1] - 0.5 * dp / n


def fade(dst, src, decay, lo=0.0, hi=255.0):
    """Subtract ``decay`` from every cell (ghosts included) and clamp."""
    np.clip(src - decay, lo, hi, out=dst)
