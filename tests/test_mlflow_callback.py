"""Tests for MLflow run lookup and sweep grouping in the Hydra callback."""

from types import SimpleNamespace

import mlflow.tracking
from omegaconf import OmegaConf

from utilities.mlflow import run_filter
from utilities.mlflow.callback import MLflowSweepCallback, groups_by_scheme, resolve_sweep_name


class RecordingClient:
    """Stands in for MlflowClient; remembers created parents."""

    runs = {}

    def __init__(self, tracking_uri=None):
        self.tracking_uri = tracking_uri

    def search_runs(self, experiment_ids, filter_string, order_by, max_results):
        return [r for name, r in self.runs.items() if f"'{name}'" in filter_string]

    def create_run(self, experiment_id, run_name, tags):
        run = SimpleNamespace(info=SimpleNamespace(run_id=f"run-{run_name}"), tags=tags)
        self.runs[run_name] = run
        return run

    def log_dict(self, run_id, dictionary, artifact_file):
        pass

    def set_terminated(self, run_id):
        pass


class TestResolveSweepName:
    """Parent run names per execution scheme."""

    def test_scheme_placeholder(self):
        cfg = OmegaConf.create({"solver": {"scheme": "parallel"}})
        assert resolve_sweep_name("sweep-${solver.scheme}", cfg) == "sweep-parallel"

    def test_plain_name(self):
        cfg = OmegaConf.create({"solver": {"scheme": "parallel"}})
        assert resolve_sweep_name("sweep", cfg) == "sweep"
        assert not groups_by_scheme("sweep")

    def test_missing_solver_defaults_to_sequential(self):
        cfg = OmegaConf.create({})
        assert resolve_sweep_name("s-{scheme}", cfg) == "s-sequential"


class TestParentRuns:
    """One parent per resolved sweep name, reused across jobs."""

    def _callback(self, monkeypatch):
        RecordingClient.runs = {}
        monkeypatch.setattr(mlflow.tracking, "MlflowClient", RecordingClient)
        callback = MLflowSweepCallback()
        callback._experiment_id = "0"
        callback._base_name = "sweep-${solver.scheme}"
        return callback

    def test_parent_per_scheme(self, monkeypatch):
        callback = self._callback(monkeypatch)
        seq = OmegaConf.create({"solver": {"scheme": "sequential"}})
        par = OmegaConf.create({"solver": {"scheme": "parallel"}})

        first = callback._parent_for(resolve_sweep_name(callback._base_name, seq), seq)
        again = callback._parent_for(resolve_sweep_name(callback._base_name, seq), seq)
        other = callback._parent_for(resolve_sweep_name(callback._base_name, par), par)

        assert first == again == "run-sweep-sequential"
        assert other == "run-sweep-parallel"
        assert RecordingClient.runs["sweep-parallel"].tags == {"sweep": "parent", "scheme": "parallel"}

    def test_existing_parent_is_reused(self, monkeypatch):
        callback = self._callback(monkeypatch)
        cfg = OmegaConf.create({"solver": {"scheme": "parallel"}})
        RecordingClient().create_run("0", run_name="sweep-parallel", tags={})

        assert callback._parent_for("sweep-parallel", cfg) == "run-sweep-parallel"
        assert len(RecordingClient.runs) == 1


class TestRunFilter:
    """Lookup of finished runs for plot_only."""

    def test_filters_on_forcing(self):
        f = run_filter("parallel", "pointer", 64)
        assert "params.scheme = 'parallel'" in f
        assert "params.forcing = 'pointer'" in f
        assert "params.N = '64'" in f
        assert "attributes.status = 'FINISHED'" in f
