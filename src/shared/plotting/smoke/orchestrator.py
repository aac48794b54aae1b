"""
Plot Generation for smoke runs.
"""

import logging
from pathlib import Path

from .colormap import palette_for_forcing
from .data_loading import fields_to_dataframe, load_fields_from_zarr
from .diagnostics import plot_diagnostics
from .fields import plot_density, plot_velocity
from .mlflow_utils import (
    download_mlflow_artifacts,
    load_timeseries_from_mlflow,
    upload_plots_to_mlflow,
)

log = logging.getLogger(__name__)


def generate_plots_for_run(
    run_id: str,
    tracking_uri: str,
    output_dir: Path,
    solver_name: str,
    N: int,
    forcing: str = "fan",
    upload_to_mlflow: bool = True,
) -> list[Path]:
    """Generate all plots for a completed run.

    Artifacts generated:
    - density.png
    - velocity.png
    - diagnostics.pdf
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    artifact_dir = download_mlflow_artifacts(run_id, tracking_uri)
    fields_df = fields_to_dataframe(load_fields_from_zarr(artifact_dir))
    timeseries_df = load_timeseries_from_mlflow(run_id, tracking_uri)

    log.info(f"Generating plots for {solver_name} N={N}")

    plot_paths = [
        plot_density(fields_df, solver_name, N, output_dir, palette=palette_for_forcing(forcing)),
        plot_velocity(fields_df, solver_name, N, output_dir),
        plot_diagnostics(timeseries_df, solver_name, N, output_dir),
    ]
    plot_paths = [p for p in plot_paths if p is not None]
    log.info(f"Generated {len(plot_paths)} plots for run")

    if upload_to_mlflow:
        upload_plots_to_mlflow(run_id, plot_paths, tracking_uri)

    log.info("Plotting done!")
    return plot_paths
