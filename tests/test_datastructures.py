"""Tests for parameter validation and result records."""

import time

import numpy as np
import pytest

from stablefluids.datastructures import Fields, Parameters, SimulationState, TimeSeries
from stablefluids.schemes import make_scheme


class TestParameters:
    """Tests for Parameters validation and export."""

    def test_defaults(self):
        p = Parameters()
        assert p.dt == pytest.approx(1.0 / 60.0)
        assert p.scheme == "sequential"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"N": 0},
            {"N": 2.5},
            {"dt": 0.0},
            {"dt": -0.1},
            {"diffusion": -1e-4},
            {"viscosity": -1.0},
            {"density_decay": -0.5},
            {"source_density": -1.0},
            {"max_ticks": -1},
            {"scheme": "gpu"},
            {"forcing": "keyboard"},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            Parameters(**kwargs)

    def test_to_dataframe_single_row(self):
        df = Parameters(N=16).to_dataframe()
        assert len(df) == 1
        assert df["N"].iloc[0] == 16

    def test_to_mlflow(self):
        params = Parameters(N=32, scheme="parallel").to_mlflow()
        assert params["N"] == 32
        assert params["scheme"] == "parallel"


class TestSimulationState:
    """Tests for field allocation."""

    @pytest.mark.parametrize("name, buffers", [("sequential", 6), ("parallel", 12)])
    def test_buffer_count(self, name, buffers):
        state = SimulationState.allocate(4, make_scheme(name))
        assert len(state.pool) == buffers
        assert state.n == 4

    def test_fields_are_zeroed(self, scheme):
        state = SimulationState.allocate(4, scheme)
        for f in state.fields():
            assert not f.data.any()

    def test_reset(self, scheme):
        state = SimulationState.allocate(4, scheme)
        state.x.data[:] = 1.0
        state.reset()
        assert not state.x.data.any()


class TestFields:
    """Tests for the interior snapshot."""

    def test_from_state(self):
        state = SimulationState.allocate(4, make_scheme("sequential"))
        state.x.set(1, 2, 7.0)
        fields = Fields.from_state(state)
        df = fields.to_dataframe()

        assert len(df) == 16
        assert list(df.columns) == ["x", "y", "u", "v", "density"]
        row = df[(np.isclose(df["x"], 0.125)) & (np.isclose(df["y"], 0.375))]
        assert row["density"].iloc[0] == 7.0

    def test_snapshot_is_a_copy(self):
        state = SimulationState.allocate(3, make_scheme("sequential"))
        fields = Fields.from_state(state)
        state.x.data[:] = 1.0
        assert not fields.density.any()


class TestTimeSeries:
    """Tests for timeseries export."""

    def test_mlflow_batch(self):
        ts = TimeSeries(
            tick=[1, 2],
            total_density=[1.0, 2.0],
            max_speed=[0.0, 0.5],
            max_divergence=[0.1, 0.2],
            kinetic_energy=[0.0, 0.1],
        )
        batch = ts.to_mlflow_batch()
        assert len(batch) == 8
        assert {m.key for m in batch} == {
            "ts_total_density",
            "ts_max_speed",
            "ts_max_divergence",
            "ts_kinetic_energy",
        }
        assert sorted({m.step for m in batch}) == [1, 2]

    def test_mlflow_batch_carries_wall_clock_timestamp(self):
        ts = TimeSeries(tick=[1], total_density=[1.0], max_speed=[0.0],
                        max_divergence=[0.0], kinetic_energy=[0.0])
        before = int(time.time() * 1000)
        batch = ts.to_mlflow_batch()
        after = int(time.time() * 1000)
        assert all(before <= m.timestamp <= after for m in batch)

    def test_to_dataframe(self):
        ts = TimeSeries(tick=[1], total_density=[1.0], max_speed=[0.0],
                        max_divergence=[0.0], kinetic_energy=[0.0])
        assert ts.to_dataframe().shape == (1, 5)
