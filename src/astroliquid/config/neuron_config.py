"""Configuration for the liquid's LIF neuron population."""

from __future__ import annotations

from dataclasses import dataclass

from astroliquid.config.validation import ValidatedConfig
from astroliquid.constants import neuron as neuron_constants


@dataclass
class LiquidNeuronConfig(ValidatedConfig):
    """Configuration for current-based LIF neurons.

    Membrane equation (explicit Euler, one step per tick):
        V += (-V / tau_mem + σ - θ · spike) · dt

    where ``spike`` is evaluated on the potential *before* the update and σ is
    zero during the refractory period.

    Attributes:
        tau_mem: Membrane time constant in ticks (default: 64.0)
        v_threshold: Firing threshold θ (default: 20.0)
        v_initial: Membrane potential at construction (default: 0.0)
        v_min: Lower membrane clamp (default: -4.0)
        v_ceiling_offset: Upper clamp is ``v_threshold + v_ceiling_offset``
        refractory_period: Absolute refractory period in ticks (default: 2)
        excitatory_fraction: Probability a neuron is excitatory (default: 0.8)
        spike_amplitude: Magnitude of an emitted spike (default: 1.0)
    """

    tau_mem: float = neuron_constants.TAU_MEMBRANE
    v_threshold: float = neuron_constants.V_THRESHOLD
    v_initial: float = neuron_constants.V_INITIAL
    v_min: float = neuron_constants.V_MIN
    v_ceiling_offset: float = neuron_constants.V_CEILING_OFFSET
    refractory_period: float = neuron_constants.REFRACTORY_PERIOD
    excitatory_fraction: float = neuron_constants.EXCITATORY_FRACTION
    spike_amplitude: float = neuron_constants.SPIKE_AMPLITUDE

    _validation_rules = {
        'tau_mem': ('positive', 'finite'),
        'v_threshold': ('finite',),
        'v_initial': ('finite',),
        'v_min': ('finite',),
        'v_ceiling_offset': ('non_negative', 'finite'),
        'refractory_period': ('non_negative',),
        'excitatory_fraction': ('probability',),
        'spike_amplitude': ('positive', 'finite'),
    }

    def __post_init__(self) -> None:
        self.validate_config()

    @property
    def v_max(self) -> float:
        """Upper membrane clamp."""
        return self.v_threshold + self.v_ceiling_offset
