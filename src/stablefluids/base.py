"""Abstract base solver for time-stepped fluid simulations."""

from abc import ABC, abstractmethod
import logging
import time

import numpy as np
import mlflow

from .datastructures import Fields, Metrics, TimeSeries
from .metrics import diagnostics, max_density

log = logging.getLogger(__name__)

DIAGNOSTIC_KEYS = ("total_density", "max_speed", "max_divergence", "kinetic_energy")


class FluidSolver(ABC):
    """Abstract base solver for a fixed-step fluid simulation.

    Handles:
    - Parameter management (input configuration)
    - Metrics tracking (output results)
    - Tick loop with per-tick diagnostics
    - MLflow live logging

    Subclasses must:
    - Set Parameters class attribute
    - Set self.state (a SimulationState) and self.scheme in __init__
    - Implement step() - advance the simulation by one tick
    """

    Parameters = None

    def __init__(self, params=None, **kwargs):
        """Initialize solver with parameters.

        Parameters
        ----------
        params : Parameters, optional
            Parameters object. If not provided, kwargs are used to create params.
        **kwargs
            Configuration parameters passed to Parameters class if params is None.
        """
        if params is None:
            if self.Parameters is None:
                raise ValueError("Subclass must define Parameters class attribute")
            params = self.Parameters(**kwargs)

        self.params = params
        self.metrics = Metrics()
        self.fields = None  # Populated after run()
        self.time_series = None  # Populated after run()
        self.tick = 0

    @abstractmethod
    def step(self):
        """Advance the simulation by one tick.

        Returns
        -------
        np.ndarray
            The padded density array after the tick.
        """
        pass

    def _finalize_fields(self):
        self.fields = Fields.from_state(self.state)

    def _store_results(self, history, ticks, wall_time, max_timeseries_points: int = 1000):
        """Store run results in self.fields, self.time_series, and self.metrics."""
        self._finalize_fields()

        # Downsample time series to max_timeseries_points
        def downsample(data):
            if data is None or len(data) <= max_timeseries_points:
                return data
            indices = np.linspace(0, len(data) - 1, max_timeseries_points, dtype=int)
            return [data[i] for i in indices]

        self.time_series = TimeSeries(
            tick=downsample(history["tick"]),
            **{key: downsample(history[key]) for key in DIAGNOSTIC_KEYS},
        )

        # Final values, not downsampled
        final = {key: (history[key][-1] if history[key] else 0.0) for key in DIAGNOSTIC_KEYS}
        self.metrics = Metrics(
            ticks=ticks,
            wall_time_seconds=wall_time,
            ticks_per_second=ticks / wall_time if wall_time > 0 else 0.0,
            max_density=max_density(self.state.x),
            passes=self.scheme.passes,
            buffer_swaps=self.state.buffer_swaps(),
            **final,
        )

    def run(self, ticks: int = None, log_every: int = 50):
        """Run a fixed number of ticks.

        Stores results in solver attributes:
        - self.fields : Fields dataclass with the final interior fields
        - self.time_series : TimeSeries dataclass with per-tick diagnostics
        - self.metrics : Metrics dataclass with run metrics

        Parameters
        ----------
        ticks : int, optional
            Number of ticks. If None, uses params.max_ticks.
        log_every : int
            Interval for console and live MLflow logging.
        """
        if ticks is None:
            ticks = self.params.max_ticks

        history = {"tick": [], **{key: [] for key in DIAGNOSTIC_KEYS}}

        time_start = time.time()
        mlflow_time = 0.0  # Time spent on MLflow logging
        warned_non_finite = False

        for i in range(ticks):
            self.step()

            diag = diagnostics(self.state)
            history["tick"].append(self.tick)
            for key in DIAGNOSTIC_KEYS:
                history[key].append(diag[key])

            if not warned_non_finite and not all(np.isfinite(list(diag.values()))):
                log.warning(f"Non-finite diagnostics at tick {self.tick}; the simulation has blown up")
                warned_non_finite = True

            if i % log_every == 0 or i == ticks - 1:
                log.info(
                    f"Tick {self.tick}: density={diag['total_density']:.4e}, "
                    f"max|u|={diag['max_speed']:.4e}, max|div|={diag['max_divergence']:.4e}"
                )

                # Live MLflow logging (timed separately)
                if mlflow.active_run():
                    t_log_start = time.time()
                    mlflow.log_metrics(diag, step=self.tick)
                    mlflow_time += time.time() - t_log_start

        wall_time = time.time() - time_start - mlflow_time  # Exclude MLflow logging time
        log.info(f"Ran {ticks} ticks in {wall_time:.2f} seconds (excl. {mlflow_time:.2f}s logging).")

        self._store_results(history, ticks, wall_time)
        return self.metrics

    def save(self, filepath):
        """Save params, metrics, time_series, and fields to an HDF5 file.

        Parameters
        ----------
        filepath : str or Path
            Output file path (use .h5 extension).
        """
        from pathlib import Path

        if self.time_series is None or self.fields is None:
            raise RuntimeError("Nothing to save: call run() first")

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        import pandas as pd
        with pd.HDFStore(filepath, mode="w", complevel=5) as store:
            store["params"] = self.params.to_dataframe()
            store["metrics"] = self.metrics.to_dataframe()
            store["time_series"] = self.time_series.to_dataframe()
            store["fields"] = self.fields.to_dataframe()
