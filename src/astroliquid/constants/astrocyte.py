"""
Astrocyte Constants - Leaky-integration (LIM) regulatory model.

    dA/dt = (-A·Γ + w·(liquid_rate - input_rate) + b) / τ

Activity ``A`` is consumed by synapses as their STDP depression coefficient.
"""

ACTIVITY_INITIAL = 0.15
"""Initial astrocyte activity (matches the default depression coefficient)."""

TAU_ASTRO = 1.0
"""Astrocyte time constant τ (ticks)."""

INPUT_GAIN = 0.01
"""Gain w on the liquid-minus-input rate difference."""

BIAS = 0.0
"""Bias b."""

DECAY_GAIN = 1.0
"""Decay gain Γ on the leak term."""

SYNAPSES_PER_ASTROCYTE = 150
"""Number of synapses each astrocyte monitors."""

N_ASTROCYTES = 1500
"""Default astrocyte population size."""

AVERAGING_WINDOW = 10
"""Ticks averaged for the liquid and input rates.

Too short makes activity jumpy; too long biases the liquid/input ratio.
"""
