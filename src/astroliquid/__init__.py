"""
ASTROLIQUID - Astrocyte-regulated liquid state machine

A spiking reservoir whose STDP depression is modulated by a population of
astrocytes comparing liquid activity with external drive.

Quick Start:
============

    from astroliquid import LiquidStateMachine, ReservoirConfig

    lsm = LiquidStateMachine(ReservoirConfig(n_neurons=300, n_astrocytes=100, seed=0))
    lsm.run_protocol([("stimulus", 125), ("rest", 125)])
    lsm.history.astrocyte_activity  # [n_astrocytes, 250]

Internal code should use explicit imports:

    from astroliquid.components.neurons.lif import LiquidNeurons
    from astroliquid.components.synapses.synapse import LiquidSynapses
"""

__version__ = "0.1.0"

# ============================================================================
# PUBLIC API
# ============================================================================

# Configuration
from astroliquid.config import (
    AstrocyteConfig,
    ConnectivityConfig,
    LiquidNeuronConfig,
    LiquidSynapseConfig,
    ReservoirConfig,
    STDPConfig,
)

# Orchestrator
from astroliquid.core import LiquidStateMachine, ReservoirHistory

# Populations
from astroliquid.components import (
    AstrocytePopulation,
    ConnectionType,
    LiquidNeurons,
    LiquidSynapses,
)

# Geometry and stimuli
from astroliquid.geometry import GridType, generate_grid
from astroliquid.stimuli import (
    BernoulliStimulus,
    ConstantStimulus,
    PeriodicStimulus,
    Programmatic,
    StimulusPattern,
)

# Errors
from astroliquid.errors import AstroLiquidError, ConfigurationError, DimensionMismatchError

__all__ = [
    "__version__",
    # Configuration
    "AstrocyteConfig",
    "ConnectivityConfig",
    "LiquidNeuronConfig",
    "LiquidSynapseConfig",
    "ReservoirConfig",
    "STDPConfig",
    # Orchestrator
    "LiquidStateMachine",
    "ReservoirHistory",
    # Populations
    "AstrocytePopulation",
    "ConnectionType",
    "LiquidNeurons",
    "LiquidSynapses",
    # Geometry and stimuli
    "GridType",
    "generate_grid",
    "BernoulliStimulus",
    "ConstantStimulus",
    "PeriodicStimulus",
    "Programmatic",
    "StimulusPattern",
    # Errors
    "AstroLiquidError",
    "ConfigurationError",
    "DimensionMismatchError",
]
