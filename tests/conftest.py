"""Pytest configuration and fixtures for stable-fluids tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stablefluids.grid import BufferPool  # noqa: E402
from stablefluids.schemes import make_scheme  # noqa: E402

SCHEME_NAMES = ["sequential", "parallel"]


@pytest.fixture(params=SCHEME_NAMES)
def scheme(request):
    """Each execution scheme in turn."""
    return make_scheme(request.param)


@pytest.fixture(params=SCHEME_NAMES)
def scheme_name(request):
    return request.param


@pytest.fixture
def make_fields():
    """Factory: allocate named fields on one N x N pool for a scheme."""

    def _make(scheme, n, *names):
        pool = BufferPool(n)
        return [scheme.allocate(pool, name) for name in names]

    return _make


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def small_params():
    """Parameters for a small 8x8 run."""
    return {
        "N": 8,
        "dt": 1.0 / 60.0,
        "diffusion": 0.0,
        "viscosity": 0.0,
        "density_decay": 0.02,
        "source_density": 10.0,
        "max_ticks": 5,
    }
