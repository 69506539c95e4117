"""Configuration for trace-based STDP."""

from __future__ import annotations

from dataclasses import dataclass

from astroliquid.config.validation import ValidatedConfig
from astroliquid.constants import synapse as synapse_constants


@dataclass
class STDPConfig(ValidatedConfig):
    """Configuration for astrocyte-modulated STDP.

    Traces follow leaky Euler integration toward the current spike magnitude:
        T_pre += (-T_pre + trace_a_plus · |pre|) · dt / tau_plus

    Weight change per tick:
        Δw = a_plus · T_pre · |post| · dt - A_minus · T_post · |pre| · dt

    Attributes:
        tau_plus: Presynaptic trace time constant (ticks)
        tau_minus: Postsynaptic trace time constant (ticks)
        trace_a_plus: Presynaptic trace increment
        trace_a_minus: Postsynaptic trace increment
        a_plus: Potentiation coefficient A+
        a_minus_default: Depression coefficient for unlinked synapses
    """

    tau_plus: float = synapse_constants.TAU_PLUS
    tau_minus: float = synapse_constants.TAU_MINUS
    trace_a_plus: float = synapse_constants.TRACE_A_PLUS
    trace_a_minus: float = synapse_constants.TRACE_A_MINUS
    a_plus: float = synapse_constants.A_PLUS
    a_minus_default: float = synapse_constants.A_MINUS_DEFAULT

    _validation_rules = {
        'tau_plus': ('positive', 'finite'),
        'tau_minus': ('positive', 'finite'),
        'trace_a_plus': ('non_negative', 'finite'),
        'trace_a_minus': ('non_negative', 'finite'),
        'a_plus': ('non_negative', 'finite'),
        'a_minus_default': ('finite',),
    }

    def __post_init__(self) -> None:
        self.validate_config()
