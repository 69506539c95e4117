"""Constant (tonic) stimulus pattern."""

from __future__ import annotations

import torch

from .base import StimulusPattern


class ConstantStimulus(StimulusPattern):
    """Same drive on every channel at every tick.

    Example:
        >>> stim = ConstantStimulus(25.0, n_channels=1)
        >>> stim(1)
        tensor([25.], dtype=torch.float64)
    """

    def __init__(
        self,
        value: float,
        n_channels: int,
        dtype: torch.dtype = torch.float64,
        device: torch.device = torch.device("cpu"),
    ):
        self.value = value
        self._pattern = torch.full((n_channels,), value, dtype=dtype, device=device)

    def get_input(self, timestep: int) -> torch.Tensor:
        return self._pattern.clone()

    @property
    def n_channels(self) -> int:
        return self._pattern.shape[0]
