"""
Field Visualization Plots for smoke runs.

Renders the density field with the simulation's own colour maps, and the
velocity magnitude with streamlines.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy.interpolate import RectBivariateSpline

from .colormap import density_to_rgba

log = logging.getLogger(__name__)


def _grid(fields_df: pd.DataFrame, column: str):
    """Unique (x, y) coordinates and the column reshaped to (ny, nx)."""
    x_unique = np.sort(fields_df["x"].unique())
    y_unique = np.sort(fields_df["y"].unique())
    nx, ny = len(x_unique), len(y_unique)
    sorted_df = fields_df.sort_values(["y", "x"])
    return x_unique, y_unique, sorted_df[column].values.reshape(ny, nx)


def _upsample(x_unique, y_unique, Z, n_fine):
    """Spline-upsample Z onto an n_fine x n_fine grid (lower order on tiny grids)."""
    # RectBivariateSpline takes y first
    ky = min(3, len(y_unique) - 1)
    kx = min(3, len(x_unique) - 1)
    x_fine = np.linspace(x_unique[0], x_unique[-1], n_fine)
    y_fine = np.linspace(y_unique[0], y_unique[-1], n_fine)
    if kx < 1 or ky < 1:
        return x_fine, y_fine, np.full((n_fine, n_fine), Z.mean())
    Z_fine = RectBivariateSpline(y_unique, x_unique, Z, kx=ky, ky=kx)(y_fine, x_fine)
    return x_fine, y_fine, Z_fine


def plot_density(
    fields_df: pd.DataFrame,
    solver: str,
    N: int,
    output_dir: Path,
    palette: str = "green_white",
    n_fine: int = 400,
) -> Path:
    """Render the density field with a simulation palette."""
    x_unique, y_unique, D = _grid(fields_df, "density")
    _, _, D_fine = _upsample(x_unique, y_unique, D, n_fine)
    # Splines overshoot near sharp fronts
    rgba = density_to_rgba(np.clip(D_fine, 0.0, 255.0), palette)

    fig, ax = plt.subplots(figsize=(7, 7))
    ax.set_facecolor("black")
    ax.imshow(
        rgba,
        origin="lower",
        extent=(0.0, 1.0, 0.0, 1.0),
        interpolation="bilinear",
    )
    ax.set_xlabel(r"$x$")
    ax.set_ylabel(r"$y$")
    ax.set_title(rf"Density: {solver}, $N={N}$")
    ax.grid(False)

    output_path = output_dir / "density.png"
    fig.savefig(output_path, dpi=200, bbox_inches="tight")
    plt.close(fig)

    return output_path


def plot_velocity(
    fields_df: pd.DataFrame, solver: str, N: int, output_dir: Path, n_fine: int = 200
) -> Path:
    """Velocity magnitude with streamlines."""
    x_unique, y_unique, U = _grid(fields_df, "u")
    _, _, V = _grid(fields_df, "v")

    x_fine, y_fine, U_interp = _upsample(x_unique, y_unique, U, n_fine)
    _, _, V_interp = _upsample(x_unique, y_unique, V, n_fine)
    vel_mag = np.sqrt(U_interp**2 + V_interp**2)

    fig, ax = plt.subplots(figsize=(8, 7))
    X_fine, Y_fine = np.meshgrid(x_fine, y_fine)
    cf = ax.contourf(X_fine, Y_fine, vel_mag, levels=40, cmap="coolwarm")

    if np.any(vel_mag > 0):
        ax.streamplot(
            x_fine,
            y_fine,
            U_interp,
            V_interp,
            density=1.5,
            linewidth=1.0,
            arrowsize=1.1,
            color=(1, 1, 1, 0.7),
            zorder=2,
        )
    else:
        log.info("Velocity field is zero, skipping streamlines")

    ax.set_xlabel(r"$x$")
    ax.set_ylabel(r"$y$")
    ax.set_title(rf"Velocity: {solver}, $N={N}$")
    ax.set_aspect("equal")
    plt.colorbar(cf, ax=ax, orientation="horizontal", pad=0.1, label=r"$|\mathbf{u}|$")

    output_path = output_dir / "velocity.png"
    fig.savefig(output_path, dpi=200, bbox_inches="tight")
    plt.close(fig)

    return output_path
