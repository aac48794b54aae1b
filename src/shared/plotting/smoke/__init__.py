"""
Smoke Plotting Package.

Provides plot generation for stable-fluids runs.
"""

from .colormap import PALETTES, density_to_rgba, palette_for_forcing
from .data_loading import fields_to_dataframe, load_fields_from_zarr, save_fields_to_zarr
from .diagnostics import plot_diagnostics
from .fields import plot_density, plot_velocity
from .mlflow_utils import (
    download_mlflow_artifacts,
    load_timeseries_from_mlflow,
    upload_plots_to_mlflow,
)
from .orchestrator import generate_plots_for_run

# Import style module to apply the seaborn theme on package import
from . import style  # noqa: F401

__all__ = [
    "generate_plots_for_run",
    "plot_density",
    "plot_velocity",
    "plot_diagnostics",
    "density_to_rgba",
    "palette_for_forcing",
    "PALETTES",
    "download_mlflow_artifacts",
    "load_timeseries_from_mlflow",
    "upload_plots_to_mlflow",
    "load_fields_from_zarr",
    "save_fields_to_zarr",
    "fields_to_dataframe",
]
