"""
Reservoir Configuration - Construction parameters of a liquid state machine.

Example:
    config = ReservoirConfig(
        n_neurons=200,
        grid_type="hex-prism",
        n_astrocytes=100,
        seed=7,
    )
    lsm = LiquidStateMachine(config)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from astroliquid.config.astrocyte_config import AstrocyteConfig
from astroliquid.config.base import BaseConfig
from astroliquid.config.learning_config import STDPConfig
from astroliquid.config.neuron_config import LiquidNeuronConfig
from astroliquid.config.synapse_config import ConnectivityConfig, LiquidSynapseConfig
from astroliquid.config.validation import ValidatedConfig
from astroliquid.constants import astrocyte as astrocyte_constants
from astroliquid.errors import ConfigurationError
from astroliquid.geometry.grids import GridType


@dataclass
class ReservoirConfig(BaseConfig, ValidatedConfig):
    """Construction parameters for ``LiquidStateMachine``.

    Inherits device, dtype, seed from BaseConfig.

    Grid type is parsed in ``__post_init__``; an unrecognised value raises
    ``ConfigurationError`` before anything is built.
    """

    # =========================================================================
    # SIZES
    # =========================================================================
    n_input: int = 80
    """Number of external input channels."""

    n_neurons: int = 1000
    """Number of liquid neurons."""

    n_astrocytes: int = astrocyte_constants.N_ASTROCYTES
    """Number of astrocytes."""

    # =========================================================================
    # GEOMETRY
    # =========================================================================
    grid_type: Union[GridType, str] = GridType.CUBE
    """Neuron placement layout: 'cube' or 'hex-prism'."""

    grid_size: Optional[Tuple[int, ...]] = None
    """Layout size. None = reference layout for the grid type."""

    grid_spacing: float = 1.0
    """Distance between neighbouring grid points."""

    # =========================================================================
    # TIMING
    # =========================================================================
    simulation_length: int = 125
    """Ticks per call to ``simulate``."""

    dt: float = 1.0
    """Euler step."""

    astro_t_avg: int = astrocyte_constants.AVERAGING_WINDOW
    """Window (ticks) over which astrocytes average liquid and input rates."""

    # =========================================================================
    # STIMULUS CONDITIONS
    # =========================================================================
    stimulus_probability: float = 0.95
    """Per-channel activation probability of the 'stimulus' condition."""

    rest_probability: float = 0.1
    """Per-channel activation probability of the 'rest' condition."""

    # =========================================================================
    # COMPONENTS
    # =========================================================================
    neuron: LiquidNeuronConfig = field(default_factory=LiquidNeuronConfig)
    synapse: LiquidSynapseConfig = field(default_factory=LiquidSynapseConfig)
    connectivity: ConnectivityConfig = field(default_factory=ConnectivityConfig)
    stdp: STDPConfig = field(default_factory=STDPConfig)
    astrocyte: AstrocyteConfig = field(default_factory=AstrocyteConfig)

    _validation_rules = {
        'n_input': ('non_negative_integer',),
        'n_neurons': ('positive_integer',),
        'n_astrocytes': ('non_negative_integer',),
        'grid_spacing': ('positive', 'finite'),
        'simulation_length': ('positive_integer',),
        'dt': ('positive', 'finite'),
        'astro_t_avg': ('positive_integer',),
        'stimulus_probability': ('probability',),
        'rest_probability': ('probability',),
    }

    def __post_init__(self) -> None:
        self.grid_type = GridType.parse(self.grid_type)
        self.validate_config()
        self.get_torch_dtype()
        if self.n_input > self.n_neurons:
            raise ConfigurationError(
                f"n_input={self.n_input} exceeds n_neurons={self.n_neurons}; "
                f"drive channels map onto the first n_input neurons"
            )
