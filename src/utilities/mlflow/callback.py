"""Hydra callback grouping multirun jobs under MLflow parent runs."""

import logging
import os
from typing import Dict, Optional

from hydra.experimental.callback import Callback
from omegaconf import DictConfig, OmegaConf

log = logging.getLogger(__name__)

SCHEME_PLACEHOLDERS = ("${solver.scheme}", "{scheme}")
SWEEP_ENV = "MLFLOW_SWEEP_ACTIVE"
PARENT_ENV = "MLFLOW_PARENT_RUN_ID"


def resolve_sweep_name(base_name: str, config: DictConfig) -> str:
    """Substitute the job's execution scheme into a sweep name pattern."""
    scheme = str(OmegaConf.select(config, "solver.scheme", default="sequential"))
    name = base_name
    for placeholder in SCHEME_PLACEHOLDERS:
        name = name.replace(placeholder, scheme)
    return name


def groups_by_scheme(base_name: str) -> bool:
    return any(p in base_name for p in SCHEME_PLACEHOLDERS)


class MLflowSweepCallback(Callback):
    """One parent run per resolved ``sweep_name``.

    ``sweep_name: sweep-${solver.scheme}`` gives a sequential and a parallel
    parent, each holding the resolutions run under that scheme. Parents left
    by an earlier sweep of the same name are reused.
    """

    def __init__(self) -> None:
        self._parents: Dict[str, str] = {}
        self._experiment_id: Optional[str] = None
        self._tracking_uri: Optional[str] = None
        self._base_name = "sweep"

    def _lookup_parent(self, client, sweep_name: str) -> Optional[str]:
        runs = client.search_runs(
            experiment_ids=[self._experiment_id],
            filter_string=f"tags.sweep = 'parent' AND tags.`mlflow.runName` = '{sweep_name}'",
            order_by=["attributes.start_time DESC"],
            max_results=1,
        )
        return runs[0].info.run_id if runs else None

    def _parent_for(self, sweep_name: str, config: DictConfig) -> str:
        from mlflow.tracking import MlflowClient

        if sweep_name in self._parents:
            return self._parents[sweep_name]

        client = MlflowClient(tracking_uri=self._tracking_uri)
        parent_id = self._lookup_parent(client, sweep_name)
        if parent_id:
            log.info(f"Sweep '{sweep_name}' continues parent run {parent_id}")
        else:
            tags = {"sweep": "parent"}
            scheme = OmegaConf.select(config, "solver.scheme")
            if scheme is not None and groups_by_scheme(self._base_name):
                tags["scheme"] = str(scheme)
            run = client.create_run(self._experiment_id, run_name=sweep_name, tags=tags)
            parent_id = run.info.run_id
            client.log_dict(parent_id, OmegaConf.to_container(config), "sweep_config.yaml")
            client.set_terminated(parent_id)
            log.info(f"Sweep '{sweep_name}' opened parent run {parent_id}")

        self._parents[sweep_name] = parent_id
        return parent_id

    def on_multirun_start(self, config: DictConfig, **kwargs) -> None:
        import mlflow
        from dotenv import load_dotenv

        from utilities.mlflow.io import setup_mlflow

        load_dotenv()
        experiment_name = setup_mlflow(config)
        self._tracking_uri = mlflow.get_tracking_uri()
        self._experiment_id = mlflow.get_experiment_by_name(experiment_name).experiment_id
        # ${solver.scheme} must stay unresolved until each job is known
        self._base_name = str(OmegaConf.to_container(config, resolve=False).get("sweep_name", "sweep"))
        os.environ[SWEEP_ENV] = "1"

    def on_job_start(self, config: DictConfig, **kwargs) -> None:
        if os.environ.get(SWEEP_ENV) != "1":
            return
        # Jobs run in RUN mode and find their parent through the environment
        os.environ[PARENT_ENV] = self._parent_for(resolve_sweep_name(self._base_name, config), config)

    def on_multirun_end(self, config: DictConfig, **kwargs) -> None:
        if os.environ.pop(SWEEP_ENV, None) != "1":
            return
        os.environ.pop(PARENT_ENV, None)
        log.info(f"Sweep finished under {len(self._parents)} parent run(s)")
