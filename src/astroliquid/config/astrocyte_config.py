"""Configuration for the astrocyte (LIM) population."""

from __future__ import annotations

from dataclasses import dataclass

from astroliquid.config.validation import ValidatedConfig
from astroliquid.constants import astrocyte as astrocyte_constants


@dataclass
class AstrocyteConfig(ValidatedConfig):
    """Leaky-integration astrocyte parameters.

        dA/dt = (-A · decay_gain + input_gain · (liquid_rate - input_rate) + bias) / tau

    Attributes:
        activity_initial: Activity at construction
        tau: Time constant τ (ticks)
        input_gain: Gain w on the rate difference
        bias: Bias b
        decay_gain: Leak gain Γ
        synapses_per_astrocyte: Size of each astrocyte's monitored subset
    """

    activity_initial: float = astrocyte_constants.ACTIVITY_INITIAL
    tau: float = astrocyte_constants.TAU_ASTRO
    input_gain: float = astrocyte_constants.INPUT_GAIN
    bias: float = astrocyte_constants.BIAS
    decay_gain: float = astrocyte_constants.DECAY_GAIN
    synapses_per_astrocyte: int = astrocyte_constants.SYNAPSES_PER_ASTROCYTE

    _validation_rules = {
        'activity_initial': ('finite',),
        'tau': ('positive', 'finite'),
        'input_gain': ('finite',),
        'bias': ('finite',),
        'decay_gain': ('finite',),
        'synapses_per_astrocyte': ('non_negative_integer',),
    }

    def __post_init__(self) -> None:
        self.validate_config()
