"""
Padded grid fields backed by a pool of physical buffers.

Layout:
- Every buffer is an (N+2) x (N+2) float64 array indexed as ``buf[i, j]``.
- Interior cells are ``1..N`` on both axes; index ``0`` and ``N+1`` form the
  ghost ring.
- Buffers are Fortran-ordered so that the flat index ``i + j*(N+2)`` is the
  memory offset of cell (i, j).

A Field is a named pair of handles into a BufferPool. The front handle
points at the buffer currently holding valid data; the optional back handle
is the "next" buffer used by double-buffered passes. ``swap()`` exchanges
the handles and never copies data.
"""

import numpy as np


class BufferPool:
    """Owns every physical buffer of one simulation grid."""

    def __init__(self, n: int, dtype=np.float64):
        if n < 1:
            raise ValueError(f"Grid resolution must be at least 1, got {n}")
        self.n = n
        self.size = n + 2
        self.dtype = dtype
        self._buffers = []

    def allocate(self) -> int:
        """Allocate one zeroed buffer and return its handle."""
        self._buffers.append(
            np.zeros((self.size, self.size), dtype=self.dtype, order="F")
        )
        return len(self._buffers) - 1

    def __getitem__(self, handle: int) -> np.ndarray:
        return self._buffers[handle]

    def __len__(self) -> int:
        return len(self._buffers)

    def field(self, name: str, double_buffered: bool = False) -> "Field":
        """Create a logical field, optionally with a shadow buffer."""
        front = self.allocate()
        back = self.allocate() if double_buffered else None
        return Field(name, self, front, back)


class Field:
    """Logical 2D scalar field over [0, N+1] x [0, N+1]."""

    def __init__(self, name: str, pool: BufferPool, front: int, back=None):
        self.name = name
        self.pool = pool
        self.front = front
        self.back = back
        self.swaps = 0

    def __repr__(self):
        return f"Field({self.name!r}, n={self.n}, front={self.front}, back={self.back})"

    @property
    def n(self) -> int:
        return self.pool.n

    @property
    def data(self) -> np.ndarray:
        """Buffer currently holding the field's valid values."""
        return self.pool[self.front]

    @property
    def next(self) -> np.ndarray:
        """Shadow buffer written by double-buffered passes."""
        if self.back is None:
            raise RuntimeError(f"Field '{self.name}' has no shadow buffer")
        return self.pool[self.back]

    @property
    def double_buffered(self) -> bool:
        return self.back is not None

    @property
    def interior(self) -> np.ndarray:
        """View of the interior cells 1..N on both axes."""
        return self.data[1:-1, 1:-1]

    def swap(self):
        """Make the shadow buffer current (handle reassignment only)."""
        if self.back is None:
            raise RuntimeError(f"Field '{self.name}' has no shadow buffer")
        self.front, self.back = self.back, self.front
        self.swaps += 1

    def shares_buffer(self, other: "Field") -> bool:
        """True if both fields currently read from the same physical buffer."""
        return self.pool is other.pool and self.front == other.front

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def flat_index(self, i: int, j: int) -> int:
        self._check(i, j)
        return i + j * (self.n + 2)

    def get(self, i: int, j: int) -> float:
        self._check(i, j)
        return float(self.data[i, j])

    def set(self, i: int, j: int, value: float):
        self._check(i, j)
        self.data[i, j] = value

    def add(self, i: int, j: int, value: float):
        self._check(i, j)
        self.data[i, j] += value

    def fill(self, value: float = 0.0):
        self.data.fill(value)

    def _check(self, i: int, j: int):
        last = self.n + 1
        if not (0 <= i <= last and 0 <= j <= last):
            raise IndexError(
                f"Cell ({i}, {j}) outside [0, {last}] x [0, {last}] of field '{self.name}'"
            )
