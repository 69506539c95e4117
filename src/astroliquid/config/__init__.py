"""
Configuration for astroliquid.

    from astroliquid.config import ReservoirConfig

    config = ReservoirConfig(n_neurons=200, grid_type="cube", seed=0)
"""

from __future__ import annotations

from astroliquid.config.astrocyte_config import AstrocyteConfig
from astroliquid.config.base import BaseConfig
from astroliquid.config.learning_config import STDPConfig
from astroliquid.config.neuron_config import LiquidNeuronConfig
from astroliquid.config.reservoir_config import ReservoirConfig
from astroliquid.config.synapse_config import ConnectivityConfig, LiquidSynapseConfig
from astroliquid.config.validation import ValidatedConfig, ValidatorRegistry

__all__ = [
    "AstrocyteConfig",
    "BaseConfig",
    "ConnectivityConfig",
    "LiquidNeuronConfig",
    "LiquidSynapseConfig",
    "ReservoirConfig",
    "STDPConfig",
    "ValidatedConfig",
    "ValidatorRegistry",
]
