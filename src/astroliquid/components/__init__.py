"""
Liquid components: neurons, synapses, astrocytes.

Each population is an ``nn.Module`` arena; entities are rows addressed by
integer handles.
"""

from __future__ import annotations

from astroliquid.components.astrocytes import AstrocytePopulation
from astroliquid.components.neurons import LiquidNeurons, pad_drive
from astroliquid.components.synapses import ConnectionType, LiquidSynapses

__all__ = [
    "AstrocytePopulation",
    "ConnectionType",
    "LiquidNeurons",
    "LiquidSynapses",
    "pad_drive",
]
