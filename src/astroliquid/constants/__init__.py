"""
Constants for astroliquid.

Defaults are grouped by the population they parameterise:

    from astroliquid.constants.neuron import TAU_MEMBRANE, V_THRESHOLD
    from astroliquid.constants.synapse import C_EE, W_MAX
    from astroliquid.constants.astrocyte import INPUT_GAIN
"""

from __future__ import annotations

from astroliquid.constants import astrocyte, neuron, synapse

__all__ = ["astrocyte", "neuron", "synapse"]
