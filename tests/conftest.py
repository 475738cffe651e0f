"""Pytest configuration for lumitrace tests.

Provides a seeded random generator for every test and a session-scoped
Taichi backend for the tests that touch the film.
"""

import numpy as np
import pytest

from lumitrace.core.film import init_backend


@pytest.fixture
def rng():
    """A freshly seeded generator so each test is reproducible on its own."""
    return np.random.default_rng(42)


@pytest.fixture(scope="session")
def taichi_backend():
    """Initialize Taichi once for the entire test session.

    Initializing through ``init_backend`` keeps a single runtime alive, so
    fields allocated by one film are not invalidated by the next.
    """
    init_backend("cpu")
    yield


@pytest.fixture
def diffuse_gray():
    from lumitrace.core.vec3 import Color
    from lumitrace.materials.lambertian import Lambertian

    return Lambertian(Color(0.5, 0.5, 0.5))
