"""MLflow utilities for experiment tracking and artifact management."""

from .io import get_experiment_name, log_fields, log_metrics_and_timeseries, run_filter, setup_mlflow

__all__ = [
    "get_experiment_name",
    "setup_mlflow",
    "run_filter",
    "log_metrics_and_timeseries",
    "log_fields",
]
