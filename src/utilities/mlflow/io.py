"""MLflow I/O utilities for experiment tracking."""

import logging
import os
import tempfile
from pathlib import Path

import mlflow
from mlflow.tracking import MlflowClient

log = logging.getLogger(__name__)


def get_experiment_name(cfg) -> str:
    """Build full experiment name with optional prefix."""
    name = cfg.experiment_name
    prefix = cfg.mlflow.get("project_prefix", "")
    if prefix and not name.startswith("/"):
        return f"{prefix}/{name}"
    return name


def setup_mlflow(cfg) -> str:
    """Setup MLflow tracking from the ``mlflow`` config block and return the experiment name."""
    tracking_uri = cfg.mlflow.get("tracking_uri", "./mlruns")
    if str(cfg.mlflow.get("mode", "")).lower() in ("files", "local"):
        os.environ.pop("MLFLOW_TRACKING_URI", None)
    os.environ["MLFLOW_TRACKING_URI"] = str(tracking_uri)
    mlflow.set_tracking_uri(tracking_uri)

    experiment_name = get_experiment_name(cfg)
    try:
        mlflow.set_experiment(experiment_name)
    except Exception as exc:
        # A deleted experiment keeps its name reserved
        fallback = f"{experiment_name}-restored"
        log.warning(
            "MLflow set_experiment failed for '%s' (%s); falling back to '%s'",
            experiment_name,
            exc,
            fallback,
        )
        experiment_name = fallback
        mlflow.set_experiment(experiment_name)

    return experiment_name


def run_filter(scheme: str, forcing: str, N: int) -> str:
    """MLflow search filter for finished runs of one scheme, forcing and resolution."""
    return (
        f"params.scheme = '{scheme}' AND params.forcing = '{forcing}' "
        f"AND params.N = '{N}' AND attributes.status = 'FINISHED'"
    )


def log_metrics_and_timeseries(solver, run_id: str):
    """Log final metrics and the batched timeseries of a finished solver."""
    mlflow.log_metrics(solver.metrics.to_mlflow())

    if solver.time_series is not None:
        batch = solver.time_series.to_mlflow_batch()
        if batch:
            MlflowClient().log_batch(run_id=run_id, metrics=batch)


def log_fields(solver):
    """Save solution fields as zarr arrays to MLflow artifacts."""
    from shared.plotting.smoke import save_fields_to_zarr

    with tempfile.TemporaryDirectory() as tmpdir:
        # zarr stores are directories, so upload the whole tree
        save_fields_to_zarr(solver.fields, Path(tmpdir))
        mlflow.log_artifacts(tmpdir, artifact_path="fields")

    log.info("Logged fields: x, y, u, v, density (zarr)")
