"""Stimulus generators for the liquid's external drive.

Every pattern maps a global tick to a per-channel drive vector:

- **BernoulliStimulus**: channels switch on with a fixed probability
  (the reference "stimulus" and "rest" conditions)
- **PeriodicStimulus**: regular pulse train
- **ConstantStimulus**: tonic input
- **Programmatic**: generated via a user function

Example:
    >>> from astroliquid.stimuli import BernoulliStimulus
    >>> rest = BernoulliStimulus(probability=0.1, n_channels=80, seed=0)
    >>> lsm.simulate(stimulus=rest)
"""

from __future__ import annotations

from .base import StimulusPattern
from .bernoulli import BernoulliStimulus
from .constant import ConstantStimulus
from .periodic import PeriodicStimulus
from .programmatic import Programmatic

__all__ = [
    "StimulusPattern",
    "BernoulliStimulus",
    "ConstantStimulus",
    "PeriodicStimulus",
    "Programmatic",
]
