"""Tests for density colour maps and smoke plots."""

import numpy as np
import pandas as pd
import pytest

from shared.plotting.smoke import (
    density_to_rgba,
    fields_to_dataframe,
    palette_for_forcing,
    plot_density,
    plot_diagnostics,
    plot_velocity,
)


class TestColormaps:
    """Tests for density_to_rgba()."""

    def test_green_white_extremes(self):
        rgba = density_to_rgba(np.array([0.0, 255.0]), "green_white")
        np.testing.assert_allclose(rgba[0], [0.0, 1.0, 0.0, 0.0])
        np.testing.assert_allclose(rgba[1], [1.0, 1.0, 1.0, 1.0])

    def test_green_white_truncates(self):
        rgba = density_to_rgba(np.array([127.9]), "green_white")
        assert rgba[0, 0] == pytest.approx(127.0 / 255.0)

    def test_mouse(self):
        rgba = density_to_rgba(np.array([0.0, 1.0]), "mouse")
        np.testing.assert_allclose(rgba[0], [50.0 / 255.0, 200.0 / 255.0, 0.0, 0.0])
        assert rgba[1, 2] == pytest.approx(1.0)
        assert rgba[1, 3] == pytest.approx(1.0)

    def test_output_in_unit_range(self):
        density = np.linspace(0.0, 255.0, 50).reshape(5, 10)
        for palette in ("green_white", "mouse"):
            rgba = density_to_rgba(density, palette)
            assert rgba.shape == (5, 10, 4)
            assert rgba.min() >= 0.0 and rgba.max() <= 1.0

    def test_unknown_palette_raises(self):
        with pytest.raises(ValueError):
            density_to_rgba(np.zeros(3), "neon")

    def test_palette_for_forcing(self):
        assert palette_for_forcing("pointer") == "mouse"
        assert palette_for_forcing("fan") == "green_white"


@pytest.fixture
def fields_df():
    n = 8
    centres = (np.arange(1, n + 1) - 0.5) / n
    X, Y = np.meshgrid(centres, centres, indexing="ij")
    return fields_to_dataframe(
        {
            "x": X.ravel(),
            "y": Y.ravel(),
            "u": np.sin(np.pi * Y).ravel(),
            "v": np.zeros(n * n),
            "density": (200.0 * X * (1 - X)).ravel(),
        }
    )


class TestPlots:
    """Plots are written to disk."""

    def test_plot_density(self, fields_df, tmp_path):
        path = plot_density(fields_df, "sequential", 8, tmp_path, n_fine=50)
        assert path.exists()

    def test_plot_velocity(self, fields_df, tmp_path):
        path = plot_velocity(fields_df, "parallel", 8, tmp_path, n_fine=40)
        assert path.exists()

    def test_plot_diagnostics(self, tmp_path):
        df = pd.DataFrame({
            "tick": [1, 2, 3],
            "total_density": [1.0, 2.0, 3.0],
            "max_speed": [0.1, 0.2, 0.3],
            "max_divergence": [0.0, 0.1, 0.1],
            "kinetic_energy": [0.0, 0.01, 0.02],
        })
        path = plot_diagnostics(df, "sequential", 8, tmp_path)
        assert path.exists()

    def test_plot_diagnostics_empty(self, tmp_path):
        assert plot_diagnostics(pd.DataFrame(), "sequential", 8, tmp_path) is None
