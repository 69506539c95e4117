"""Configuration for liquid synapses and spatial connectivity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from astroliquid.config.validation import ValidatedConfig
from astroliquid.constants import synapse as synapse_constants
from astroliquid.errors import ConfigurationError


@dataclass
class ConnectivityConfig(ValidatedConfig):
    """Distance- and type-dependent connection rule.

    P(pre → post) = C[type] · exp(-(distance / connection_lambda)²)

    Attributes:
        c_ee, c_ei, c_ie, c_ii: Base probability per connection type
            (pre letter first).
        connection_lambda: Spatial length constant λ (grid units).
        weight_pool_size: Samples in the initial weight pool.
        weight_pool_std: Std of the Gaussian the pool is folded from.
    """

    c_ee: float = synapse_constants.C_EE
    c_ei: float = synapse_constants.C_EI
    c_ie: float = synapse_constants.C_IE
    c_ii: float = synapse_constants.C_II
    connection_lambda: float = synapse_constants.CONNECTION_LAMBDA
    weight_pool_size: int = synapse_constants.WEIGHT_POOL_SIZE
    weight_pool_std: float = synapse_constants.WEIGHT_POOL_STD

    _validation_rules = {
        'c_ee': ('probability',),
        'c_ei': ('probability',),
        'c_ie': ('probability',),
        'c_ii': ('probability',),
        'connection_lambda': ('positive', 'finite'),
        'weight_pool_size': ('positive_integer',),
        'weight_pool_std': ('positive', 'finite'),
    }

    def __post_init__(self) -> None:
        self.validate_config()


@dataclass
class LiquidSynapseConfig(ValidatedConfig):
    """Weight bounds and conduction filter of liquid synapses.

    Attributes:
        w_min: Lower weight bound (inclusive).
        w_max: Upper weight bound (inclusive), also the initial weight scale.
        filter_length: Taps of the alpha-function kernel.
        filter_tau: Time constant of the kernel (ticks).
        filter_window: Trailing presynaptic history convolved each tick.
        output_buffer_length: Length of the per-synapse rolling buffer of
            filtered outputs. None = ``filter_length``.
    """

    w_min: float = synapse_constants.W_MIN
    w_max: float = synapse_constants.W_MAX
    filter_length: int = synapse_constants.FILTER_LENGTH
    filter_tau: float = synapse_constants.FILTER_TAU
    filter_window: int = synapse_constants.FILTER_WINDOW
    output_buffer_length: Optional[int] = None

    _validation_rules = {
        'w_min': ('finite',),
        'w_max': ('finite',),
        'filter_length': ('positive_integer',),
        'filter_tau': ('positive', 'finite'),
        'filter_window': ('positive_integer',),
    }

    def __post_init__(self) -> None:
        self.validate_config()
        if self.w_min > self.w_max:
            raise ConfigurationError(
                f"w_min={self.w_min} must not exceed w_max={self.w_max}"
            )
        if self.output_buffer_length is None:
            self.output_buffer_length = self.filter_length
        elif self.output_buffer_length <= 0:
            raise ConfigurationError(
                f"output_buffer_length={self.output_buffer_length} must be positive"
            )
