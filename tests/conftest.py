"""Shared test fixtures and configuration."""

import pytest
import torch
import numpy as np

from astroliquid.config import AstrocyteConfig, ReservoirConfig


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure reproducible tests by setting all random seeds.

    This fixture runs automatically for every test. Reservoirs draw from
    their own seeded generator; this covers torch's global generator used by
    ad-hoc test tensors.
    """
    torch.manual_seed(42)
    np.random.seed(42)


@pytest.fixture
def device():
    """Get available device (prefer GPU if available)."""
    return torch.device("cuda" if torch.cuda.is_available() else "cpu")


@pytest.fixture
def small_config():
    """Reservoir small enough to simulate in milliseconds."""
    return ReservoirConfig(
        n_input=10,
        n_neurons=60,
        n_astrocytes=8,
        grid_size=(4, 4, 4),
        simulation_length=20,
        astro_t_avg=5,
        astrocyte=AstrocyteConfig(synapses_per_astrocyte=20),
        seed=1234,
    )


@pytest.fixture
def n_timesteps():
    """Standard simulation duration."""
    return 40

