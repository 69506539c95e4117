"""Base class for stimulus generators."""

from __future__ import annotations

from abc import ABC, abstractmethod

import torch


class StimulusPattern(ABC):
    """Abstract base class for per-tick drive generators.

    A stimulus maps a global tick index to a vector of per-channel drive
    values. Patterns are pure in the tick index: asking for the same tick
    twice returns the same vector, which is what lets a reservoir run be
    split and resumed without changing its trajectory.

    Subclasses:
        - BernoulliStimulus: each channel on with a fixed probability
        - PeriodicStimulus: regular pulse train at a given frequency
        - ConstantStimulus: the same value on every channel, every tick
        - Programmatic: generated on demand by a user function
    """

    @abstractmethod
    def get_input(self, timestep: int) -> torch.Tensor:
        """Get the drive vector for a global tick.

        Args:
            timestep: Global tick index (1-based in reservoir runs)

        Returns:
            Drive tensor [n_channels]
        """

    @property
    @abstractmethod
    def n_channels(self) -> int:
        """Number of channels in each drive vector."""

    def __call__(self, timestep: int) -> torch.Tensor:
        return self.get_input(timestep)
