"""
Stable Fluids - Unified entry point for simulating and plotting.

Usage:
    python main.py solver=parallel forcing=dual N=256 ticks=1200
    python main.py -m solver=sequential,parallel N=64,128,256
    python main.py solver=parallel N=256 plot_only=true
"""

import logging
import os
import sys
import tempfile
from pathlib import Path

import hydra
import mlflow
from dotenv import load_dotenv
from hydra.core.hydra_config import HydraConfig
from hydra.utils import instantiate
from omegaconf import DictConfig, OmegaConf

load_dotenv()
sys.path.insert(0, str(Path(__file__).parent / "src"))

from utilities.mlflow import (  # noqa: E402
    get_experiment_name,
    log_fields,
    log_metrics_and_timeseries,
    run_filter,
    setup_mlflow,
)

log = logging.getLogger(__name__)


def find_existing_run(cfg: DictConfig) -> str:
    """Find the latest finished MLflow run matching scheme, forcing and resolution."""
    forcing = HydraConfig.get().runtime.choices["forcing"]
    experiment = mlflow.get_experiment_by_name(get_experiment_name(cfg))
    if not experiment:
        raise ValueError(f"Experiment not found: {cfg.experiment_name}")

    runs = mlflow.search_runs(
        experiment_ids=[experiment.experiment_id],
        filter_string=run_filter(cfg.solver.scheme, forcing, cfg.N),
        order_by=["start_time DESC"],
        max_results=1,
    )
    if runs.empty:
        raise ValueError(f"No matching run found for scheme={cfg.solver.scheme}, forcing={forcing}, N={cfg.N}")

    run_id = runs.iloc[0]["run_id"]
    log.info(f"Found existing run: {run_id[:8]}")
    return run_id


def run_solver(cfg: DictConfig) -> str:
    """Run solver and log to MLflow. Returns run_id."""
    solver = instantiate(cfg.solver, _convert_="partial")
    run_name = f"{solver.params.scheme}_{solver.params.forcing}_N{cfg.N}"

    # Parent run tagging for sweeps
    parent_run_id = os.environ.get("MLFLOW_PARENT_RUN_ID")
    tags = {"scheme": solver.params.scheme, "forcing": solver.params.forcing}
    if parent_run_id:
        tags.update({"mlflow.parentRunId": parent_run_id, "parent_run_id": parent_run_id, "sweep": "child"})

    with mlflow.start_run(run_name=run_name, tags=tags, nested=bool(parent_run_id)) as run:
        mlflow.log_params(solver.params.to_mlflow())
        mlflow.log_dict(OmegaConf.to_container(cfg), "config.yaml")

        log.info(f"Simulating: {run_name} for {cfg.ticks} ticks")
        solver.run(ticks=cfg.ticks)

        log_metrics_and_timeseries(solver, run.info.run_id)
        log_fields(solver)

        if cfg.get("save_h5", False):
            with tempfile.TemporaryDirectory() as tmpdir:
                h5_path = Path(tmpdir) / "solution.h5"
                solver.save(h5_path)
                mlflow.log_artifact(str(h5_path))

        m = solver.metrics
        log.info(
            f"Done: {m.ticks} ticks, {m.ticks_per_second:.1f} ticks/s, "
            f"max|div|={m.max_divergence:.3e}, time={m.wall_time_seconds:.2f}s"
        )
        return run.info.run_id


def generate_plots(cfg: DictConfig, run_id: str):
    """Generate plots for a completed run."""
    from shared.plotting.smoke import generate_plots_for_run

    forcing = mlflow.get_run(run_id).data.params.get("forcing", "fan")
    generate_plots_for_run(
        run_id=run_id,
        tracking_uri=cfg.mlflow.get("tracking_uri", "./mlruns"),
        output_dir=Path(HydraConfig.get().runtime.output_dir),
        solver_name=cfg.solver.scheme,
        N=cfg.N,
        forcing=forcing,
        upload_to_mlflow=True,
    )


@hydra.main(config_path="conf", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    """Main entry point."""
    log.info(f"Scheme: {cfg.solver.scheme}, N={cfg.N}, ticks={cfg.ticks}")
    log.info(f"MLflow experiment: {setup_mlflow(cfg)}")

    run_id = find_existing_run(cfg) if cfg.get("plot_only") else run_solver(cfg)
    generate_plots(cfg, run_id)


if __name__ == "__main__":
    main()
