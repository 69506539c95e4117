"""Periodic pulse-train stimulus pattern."""

from __future__ import annotations

import torch

from .base import StimulusPattern


class PeriodicStimulus(StimulusPattern):
    """Regular pulse train on all channels.

    A pulse is emitted on ticks where ``timestep % period == 0``, with
    ``period = max(1, round(1000 / (frequency_hz * dt_ms)))``. Frequencies
    at or above the tick rate therefore drive every tick.
    """

    def __init__(
        self,
        frequency_hz: float,
        n_channels: int,
        amplitude: float = 1.0,
        dt_ms: float = 1.0,
        dtype: torch.dtype = torch.float64,
        device: torch.device = torch.device("cpu"),
    ):
        if frequency_hz <= 0:
            raise ValueError(f"frequency_hz={frequency_hz} must be positive")
        self.frequency_hz = frequency_hz
        self.amplitude = amplitude
        self.period = max(1, round(1000.0 / (frequency_hz * dt_ms)))
        self._pulse = torch.full((n_channels,), amplitude, dtype=dtype, device=device)
        self._silence = torch.zeros(n_channels, dtype=dtype, device=device)

    def get_input(self, timestep: int) -> torch.Tensor:
        if timestep % self.period == 0:
            return self._pulse.clone()
        return self._silence.clone()

    @property
    def n_channels(self) -> int:
        return self._pulse.shape[0]
