"""Programmatic stimulus pattern."""

from __future__ import annotations

from typing import Callable, Sequence, Union

import torch

from .base import StimulusPattern


class Programmatic(StimulusPattern):
    """Stimulus generated on demand by a user function.

    Wraps any ``fn(timestep) -> drive`` so it can be used wherever a
    ``StimulusPattern`` is expected. Lists and arrays are converted to
    float64 tensors.
    """

    def __init__(
        self,
        fn: Callable[[int], Union[torch.Tensor, Sequence[float]]],
        dtype: torch.dtype = torch.float64,
    ):
        """Initialize programmatic stimulus.

        Args:
            fn: Function taking the global tick and returning a drive vector
            dtype: Output dtype
        """
        self.fn = fn
        self.dtype = dtype
        self._n_channels = self.get_input(1).shape[0]

    def get_input(self, timestep: int) -> torch.Tensor:
        """Get input for timestep by calling the function."""
        return torch.as_tensor(self.fn(timestep), dtype=self.dtype).reshape(-1)

    @property
    def n_channels(self) -> int:
        return self._n_channels
