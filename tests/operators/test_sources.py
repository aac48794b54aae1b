"""Tests for source injection and density decay."""

import numpy as np
import pytest

from stablefluids.operators import DENSITY_MAX, add_source, decay


class TestAddSource:
    """Tests for add_source()."""

    def test_sources_are_added(self, scheme, make_fields):
        (x,) = make_fields(scheme, 4, "x")
        x.set(2, 2, 1.5)
        source = np.zeros_like(x.data)
        source[2, 2] = 2.0
        source[0, 3] = 1.0

        add_source(scheme, x, source)

        assert x.get(2, 2) == 3.5
        assert x.get(0, 3) == 1.0

    def test_shape_mismatch_raises(self, scheme, make_fields):
        (x,) = make_fields(scheme, 4, "x")
        with pytest.raises(ValueError):
            add_source(scheme, x, np.zeros((5, 5)))


class TestDecay:
    """Tests for decay()."""

    def test_subtracts_and_clamps(self, scheme, make_fields):
        (x,) = make_fields(scheme, 2, "x")
        x.set(1, 1, -5.0)
        x.set(1, 2, 0.01)
        x.set(2, 1, 100.0)
        x.set(2, 2, 300.0)

        decay(scheme, x, 0.02)

        assert x.get(1, 1) == 0.0
        assert x.get(1, 2) == 0.0
        assert x.get(2, 1) == pytest.approx(99.98)
        assert x.get(2, 2) == DENSITY_MAX

    def test_repeated_decay_stays_in_range(self, scheme, make_fields):
        (x,) = make_fields(scheme, 3, "x")
        x.set(1, 1, 0.0)
        x.set(1, 2, DENSITY_MAX)
        x.set(2, 2, 0.5)
        x.set(3, 3, 1000.0)

        for _ in range(200):
            decay(scheme, x, 0.02)
            assert x.data.min() >= 0.0
            assert x.data.max() <= DENSITY_MAX
            assert x.get(1, 1) == 0.0

        assert x.get(1, 2) == pytest.approx(DENSITY_MAX - 200 * 0.02)
        assert x.get(2, 2) == 0.0
        assert x.get(3, 3) == pytest.approx(DENSITY_MAX - 199 * 0.02)

    def test_applies_to_ghost_cells(self, scheme, make_fields):
        (x,) = make_fields(scheme, 3, "x")
        x.data[:] = 1.0
        x.set(0, 0, 400.0)

        decay(scheme, x, 0.5)

        np.testing.assert_allclose(x.data[1:, 1:], 0.5)
        assert x.get(0, 0) == DENSITY_MAX
        assert x.get(0, 1) == 0.5
