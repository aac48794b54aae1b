"""Forcing collaborators.

A forcing is called once per tick, before the velocity and density steps,
with freshly zeroed :class:`SourceBuffers`. Whatever it writes there is added
to ``x``, ``u`` and ``v`` by the integrator, so forcings can only ever add
to the fields, never overwrite them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

log = logging.getLogger(__name__)


@dataclass
class SourceBuffers:
    """Additive per-tick sources on the padded (N+2)x(N+2) grid."""

    density: np.ndarray
    u: np.ndarray
    v: np.ndarray

    @classmethod
    def allocate(cls, n: int, dtype=np.float64):
        shape = (n + 2, n + 2)
        return cls(
            density=np.zeros(shape, dtype=dtype, order="F"),
            u=np.zeros(shape, dtype=dtype, order="F"),
            v=np.zeros(shape, dtype=dtype, order="F"),
        )

    @property
    def n(self) -> int:
        return self.density.shape[0] - 2

    def clear(self):
        self.density.fill(0.0)
        self.u.fill(0.0)
        self.v.fill(0.0)

    def contains(self, i: int, j: int) -> bool:
        return 0 <= i <= self.n + 1 and 0 <= j <= self.n + 1

    def add(self, i: int, j: int, density=0.0, u=0.0, v=0.0) -> bool:
        """Add to one cell. Cells outside the padded grid are ignored."""
        if not self.contains(i, j):
            return False
        self.density[i, j] += density
        self.u[i, j] += u
        self.v[i, j] += v
        return True

    def is_empty(self) -> bool:
        return not (self.density.any() or self.u.any() or self.v.any())


class Forcing(ABC):
    """Writes additive sources for one tick."""

    name = None

    def __call__(self, sources: SourceBuffers, magnitude: float, tick: int):
        self.apply(sources, magnitude, tick)

    @abstractmethod
    def apply(self, sources: SourceBuffers, magnitude: float, tick: int):
        """Add this tick's sources into ``sources``."""


class NoForcing(Forcing):
    name = "none"

    def apply(self, sources, magnitude, tick):
        pass


class FanForcing(Forcing):
    """Constant inflow along the left interior column.

    The injection is strongest at mid-height and tapers linearly to zero at
    the top and bottom walls.
    """

    name = "fan"

    def __init__(self, column: int = 1, density_scale: float = 10.0, velocity_scale: float = 5.0):
        self.column = column
        self.density_scale = density_scale
        self.velocity_scale = velocity_scale

    @staticmethod
    def strength(n: int) -> np.ndarray:
        """1 - |2j/(N+2) - 1| for j = 0..N+1."""
        j = np.arange(n + 2, dtype=np.float64)
        return 1.0 - np.abs(2.0 * j / (n + 2) - 1.0)

    def apply(self, sources, magnitude, tick):
        if not 0 <= self.column <= sources.n + 1:
            return
        s = self.strength(sources.n)
        sources.density[self.column, :] += magnitude * s * self.density_scale
        sources.u[self.column, :] += s * self.velocity_scale


class PointerForcing(Forcing):
    """Replays a recorded pointer path, one grid position per tick.

    ``None`` entries mean the button is up. Density is dropped on the pointer
    cell and its four neighbours; the pointer cell also receives a velocity
    kick d*(2/(|d|+1))*velocity_scale per axis, where d is the displacement
    since the previous tick. Nothing is added on the first tick of a drag.
    """

    name = "pointer"

    def __init__(self, path: Sequence[Optional[Tuple[int, int]]] = (), velocity_scale: float = 15.0,
                 loop: bool = False):
        self.path: List[Optional[Tuple[int, int]]] = [
            None if p is None else (int(p[0]), int(p[1])) for p in path
        ]
        self.velocity_scale = velocity_scale
        self.loop = loop

    @classmethod
    def stroke(cls, start, end, steps: int, n: int, **kwargs):
        """Straight drag from ``start`` to ``end``, given as fractions of the unit square."""
        if steps < 2:
            raise ValueError(f"A stroke needs at least 2 steps, got {steps}")
        t = np.linspace(0.0, 1.0, steps)
        fx = start[0] + t * (end[0] - start[0])
        fy = start[1] + t * (end[1] - start[1])
        path = [(1 + int(round(x * (n - 1))), 1 + int(round(y * (n - 1)))) for x, y in zip(fx, fy)]
        return cls(path=path, **kwargs)

    def position(self, tick: int):
        if tick < 0 or not self.path:
            return None
        if self.loop:
            return self.path[tick % len(self.path)]
        return self.path[tick] if tick < len(self.path) else None

    def kick(self, d: float) -> float:
        return d * (2.0 / (abs(d) + 1.0)) * self.velocity_scale

    def apply(self, sources, magnitude, tick):
        current = self.position(tick)
        previous = self.position(tick - 1)
        if current is None or previous is None:
            return

        ci, cj = current
        for di, dj in ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)):
            sources.add(ci + di, cj + dj, density=magnitude)

        du = ci - previous[0]
        dv = cj - previous[1]
        sources.add(ci, cj, u=self.kick(du), v=self.kick(dv))


@dataclass
class Impulse:
    """Fixed amounts added at one cell; ``tick=None`` means every tick."""

    i: int
    j: int
    density: float = 0.0
    u: float = 0.0
    v: float = 0.0
    tick: Optional[int] = 0


class ImpulseForcing(Forcing):
    """Adds fixed amounts at given cells on selected ticks."""

    name = "impulse"

    def __init__(self, impulses: Sequence = ()):
        self.impulses = [imp if isinstance(imp, Impulse) else Impulse(**imp) for imp in impulses]

    def apply(self, sources, magnitude, tick):
        for imp in self.impulses:
            if imp.tick is not None and imp.tick != tick:
                continue
            if not sources.add(imp.i, imp.j, density=imp.density, u=imp.u, v=imp.v):
                log.debug(f"Impulse at ({imp.i}, {imp.j}) is outside the grid, ignored")


class CompositeForcing(Forcing):
    """Applies several forcings in order."""

    name = "dual"

    def __init__(self, forcings: Sequence[Forcing] = ()):
        self.forcings = list(forcings)

    def apply(self, sources, magnitude, tick):
        for forcing in self.forcings:
            forcing(sources, magnitude, tick)


FORCINGS = {
    NoForcing.name: NoForcing,
    FanForcing.name: FanForcing,
    PointerForcing.name: PointerForcing,
    ImpulseForcing.name: ImpulseForcing,
}

# Scripted drags used when a pointer mode is requested by name alone,
# the same strokes as conf/forcing/{pointer,dual}.yaml
POINTER_STROKE = dict(start=(0.2, 0.2), end=(0.8, 0.7), steps=90)
DUAL_STROKE = dict(start=(0.5, 0.8), end=(0.5, 0.2), steps=90)


def _default_pointer(n, stroke, **kwargs) -> PointerForcing:
    if n is None:
        raise ValueError("A pointer forcing built by name needs a path or the grid size n")
    return PointerForcing.stroke(n=n, loop=True, **stroke, **kwargs)


def make_forcing(mode, n: Optional[int] = None, **kwargs) -> Forcing:
    """Build a forcing from a mode name.

    ``mode`` may already be a Forcing instance, or ``None`` for no forcing.
    Without an explicit ``path``, "pointer" replays a looping scripted drag
    on an ``n`` x ``n`` grid. "dual" combines a fan with such a drag, as in
    the interactive demo.
    """
    if isinstance(mode, Forcing):
        return mode
    if mode is None:
        return NoForcing()
    if mode == "pointer" and "path" not in kwargs:
        return _default_pointer(n, POINTER_STROKE, **kwargs)
    if mode == CompositeForcing.name:
        path = kwargs.pop("path", None)
        pointer = PointerForcing(path=path) if path is not None else _default_pointer(n, DUAL_STROKE)
        return CompositeForcing([FanForcing(**kwargs), pointer])
    try:
        cls = FORCINGS[mode]
    except KeyError:
        raise ValueError(
            f"Unknown forcing mode '{mode}', expected one of {sorted(FORCINGS) + [CompositeForcing.name]}"
        ) from None
    return cls(**kwargs)
