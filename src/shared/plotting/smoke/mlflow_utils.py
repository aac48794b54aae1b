"""
MLflow utilities for smoke plotting.

Handles downloading artifacts, loading timeseries, and uploading plots.
"""

import logging
import tempfile
from pathlib import Path

import mlflow
import pandas as pd

log = logging.getLogger(__name__)

TIMESERIES_METRICS = ("total_density", "max_speed", "max_divergence", "kinetic_energy")


def download_mlflow_artifacts(run_id: str, tracking_uri: str) -> Path:
    """Download run artifacts to a temp directory."""
    mlflow.set_tracking_uri(tracking_uri)
    client = mlflow.tracking.MlflowClient()

    run = client.get_run(run_id)
    log.info(f"Downloading artifacts from: {run.info.run_name}")

    tmpdir = tempfile.mkdtemp(prefix="smoke_plot_")
    artifact_path = client.download_artifacts(run_id, "", tmpdir)

    return Path(artifact_path)


def load_timeseries_from_mlflow(run_id: str, tracking_uri: str) -> pd.DataFrame:
    """Load the batched ``ts_*`` metrics of a run, indexed by tick."""
    mlflow.set_tracking_uri(tracking_uri)
    client = mlflow.tracking.MlflowClient()

    series = {}
    for name in TIMESERIES_METRICS:
        history = client.get_metric_history(run_id, f"ts_{name}")
        if history:
            series[name] = pd.Series(
                {m.step: m.value for m in history}, name=name, dtype=float
            )

    if not series:
        return pd.DataFrame()

    df = pd.concat(series.values(), axis=1).sort_index()
    df.index.name = "tick"
    return df.reset_index()


def upload_plots_to_mlflow(run_id: str, plot_paths: list, tracking_uri: str):
    """Upload generated plots to MLflow run as artifacts."""
    mlflow.set_tracking_uri(tracking_uri)

    valid_paths = [p for p in plot_paths if p and p.exists()]

    active_run = mlflow.active_run()
    if active_run and active_run.info.run_id == run_id:
        for path in valid_paths:
            mlflow.log_artifact(str(path), artifact_path="plots")
            log.info(f"Uploaded: {path.name}")
    else:
        with mlflow.start_run(run_id=run_id, nested=True):
            for path in valid_paths:
                mlflow.log_artifact(str(path), artifact_path="plots")
                log.info(f"Uploaded: {path.name}")
