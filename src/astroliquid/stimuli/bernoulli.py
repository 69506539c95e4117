"""Bernoulli ("coin flip") stimulus pattern."""

from __future__ import annotations

from typing import Optional

import torch

from .base import StimulusPattern

_SEED_STRIDE = 1_000_003
_SEED_MODULUS = 2**63 - 1


class BernoulliStimulus(StimulusPattern):
    """Each channel is active with a fixed probability on every tick.

    The reference conditions are ``BernoulliStimulus(0.95, 80)`` for
    "stimulus" and ``BernoulliStimulus(0.1, 80)`` for "rest".

    Draws are seeded from ``(seed, timestep)``, so the vector for a tick is
    reproducible regardless of the order in which ticks are requested.

    Example:
        >>> stim = BernoulliStimulus(probability=0.95, n_channels=80, seed=3)
        >>> torch.equal(stim(12), stim(12))
        True
    """

    def __init__(
        self,
        probability: float,
        n_channels: int,
        amplitude: float = 1.0,
        seed: Optional[int] = None,
        dtype: torch.dtype = torch.float64,
        device: torch.device = torch.device("cpu"),
    ):
        """Initialize Bernoulli stimulus.

        Args:
            probability: Per-channel activation probability in [0, 1]
            n_channels: Number of input channels
            amplitude: Drive value of an active channel
            seed: Base seed. None = draw one from torch's global generator
            dtype: Output dtype
            device: Output device
        """
        if not (0.0 <= probability <= 1.0):
            raise ValueError(f"probability={probability} must be in [0, 1]")
        if n_channels < 0:
            raise ValueError(f"n_channels={n_channels} must be non-negative")

        self.probability = probability
        self.amplitude = amplitude
        self.dtype = dtype
        self.device = device
        self._n_channels = n_channels
        if seed is None:
            seed = int(torch.randint(0, 2**31 - 1, (1,)).item())
        self.seed = seed

    def get_input(self, timestep: int) -> torch.Tensor:
        """Draw the channel vector for ``timestep``."""
        generator = torch.Generator()
        generator.manual_seed((self.seed * _SEED_STRIDE + timestep) % _SEED_MODULUS)
        draws = torch.rand(self._n_channels, generator=generator, dtype=torch.float64)
        active = draws < self.probability
        return (active.to(self.dtype) * self.amplitude).to(self.device)

    @property
    def n_channels(self) -> int:
        return self._n_channels

    def __repr__(self) -> str:
        return (
            f"BernoulliStimulus(probability={self.probability}, "
            f"n_channels={self._n_channels}, seed={self.seed})"
        )
