import numpy as np
import pytest

from rho_myosin.odes import build_network
from rho_myosin.parameters import IntegratorSettings
from rho_myosin.state_vector import N_SPECIES, get_initial_state


@pytest.fixture(scope="session")
def network():
    return build_network()


@pytest.fixture
def reference_state():
    return get_initial_state()


@pytest.fixture
def ones_state():
    return np.ones(N_SPECIES)


@pytest.fixture
def decay_settings():
    return IntegratorSettings(t_end=1.0, tolerance=1e-8, sample_interval=0.1)


class CountingRHS:
    """Wraps a right-hand side and remembers every evaluation."""

    def __init__(self, fn):
        self.fn = fn
        self.calls = []
        self.outputs = []

    def __call__(self, t, x):
        out = np.asarray(self.fn(t, x), dtype=float)
        self.calls.append((t, np.array(x, copy=True)))
        self.outputs.append(out.copy())
        return out


@pytest.fixture
def counting_rhs():
    return CountingRHS
