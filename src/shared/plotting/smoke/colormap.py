"""
Density colour maps.

Maps a density field on the [0, 255] scale to RGBA in [0, 1]:

- ``green_white``: red, blue and alpha follow the truncated density; green
  is saturated. Used for the fan.
- ``mouse``: red cycles with (density + 50) mod 255, green is fixed at
  200/255, blue and alpha follow density*255 (saturating almost at once).
  Used for pointer input.
"""

import numpy as np

PALETTES = ("green_white", "mouse")

_DIV = 1.0 / 255.0


def _green_white(density: np.ndarray) -> np.ndarray:
    d = np.trunc(density) * _DIV
    rgba = np.empty(density.shape + (4,))
    rgba[..., 0] = d
    rgba[..., 1] = 1.0
    rgba[..., 2] = d
    rgba[..., 3] = d
    return rgba


def _mouse(density: np.ndarray) -> np.ndarray:
    d = np.trunc(density * 255.0) * _DIV
    rgba = np.empty(density.shape + (4,))
    rgba[..., 0] = np.mod(density + 50.0, 255.0) * _DIV
    rgba[..., 1] = 200.0 * _DIV
    rgba[..., 2] = d
    rgba[..., 3] = d
    return rgba


def density_to_rgba(density, palette: str = "green_white") -> np.ndarray:
    """Colour a density array; output has shape ``density.shape + (4,)``."""
    density = np.asarray(density, dtype=np.float64)
    if palette == "green_white":
        rgba = _green_white(density)
    elif palette == "mouse":
        rgba = _mouse(density)
    else:
        raise ValueError(f"Unknown palette '{palette}', expected one of {PALETTES}")
    return np.clip(rgba, 0.0, 1.0)


def palette_for_forcing(forcing: str) -> str:
    """The palette the interactive demo uses for a forcing mode."""
    return "mouse" if forcing == "pointer" else "green_white"
