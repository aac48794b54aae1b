"""Tests for field diagnostics."""

import numpy as np
import pytest

from stablefluids import metrics
from stablefluids.grid import BufferPool


@pytest.fixture
def velocity():
    pool = BufferPool(4)
    return pool.field("u"), pool.field("v")


class TestDiagnostics:
    """Tests for scalar diagnostics."""

    def test_zero_field(self, velocity):
        u, v = velocity
        assert metrics.max_divergence(u, v) == 0.0
        assert metrics.kinetic_energy(u, v) == 0.0
        assert metrics.max_speed(u, v) == 0.0

    def test_uniform_flow(self, velocity):
        u, v = velocity
        u.interior[:] = 3.0
        v.interior[:] = 4.0
        assert metrics.max_speed(u, v) == pytest.approx(5.0)
        # 0.5 * 16 cells * 25 / 16
        assert metrics.kinetic_energy(u, v) == pytest.approx(12.5)

    def test_linear_flow_divergence(self, velocity):
        u, v = velocity
        # u = i / N has du/dx = 1 everywhere
        u.data[:] = np.arange(6)[:, None] / 4.0
        np.testing.assert_allclose(metrics.divergence_field(u, v), 1.0)

    def test_rigid_rotation_vorticity(self, velocity):
        u, v = velocity
        i = np.arange(6)[:, None] * np.ones((1, 6))
        j = np.arange(6)[None, :] * np.ones((6, 1))
        u.data[:] = -j / 4.0
        v.data[:] = i / 4.0
        np.testing.assert_allclose(metrics.vorticity_field(u, v), 2.0)
        np.testing.assert_allclose(metrics.divergence_field(u, v), 0.0, atol=1e-12)

    def test_density_ignores_ghosts(self):
        x = BufferPool(3).field("x")
        x.data[:] = 1.0
        assert metrics.total_density(x) == 9.0
        x.set(0, 0, 100.0)
        assert metrics.max_density(x) == 1.0

    def test_accepts_plain_arrays(self):
        a = np.ones((5, 5))
        assert metrics.total_density(a) == 9.0
