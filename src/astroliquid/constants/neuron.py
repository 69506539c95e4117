"""
Neuron Constants - Membrane time constant, threshold, refractory period.

The liquid uses a current-based LIF neuron in un-normalised units: the
threshold sits at 20 and the membrane is clamped to [-4, threshold + 1].
There is no separate reset potential; the spike term ``-θ · spike`` in the
membrane equation pulls the potential back down on the tick after a spike.

References:
-----------
- Maass, Natschläger & Markram (2002): Real-time computing without stable states
- Gerstner et al. (2014): Neuronal Dynamics, Chapter 1
"""

# =============================================================================
# MEMBRANE DYNAMICS
# =============================================================================

TAU_MEMBRANE = 64.0
"""Membrane time constant (ticks).

Slow leak relative to the refractory period, so sustained drive integrates
over many ticks before decaying.
"""

V_THRESHOLD = 20.0
"""Firing threshold θ."""

V_INITIAL = 0.0
"""Membrane potential at construction."""

V_MIN = -4.0
"""Lower membrane clamp. Upper clamp is ``threshold + 1``."""

V_CEILING_OFFSET = 1.0
"""Distance of the upper membrane clamp above threshold."""

REFRACTORY_PERIOD = 2
"""Absolute refractory period (ticks).

Effective input is zero while ``t - last_spike < REFRACTORY_PERIOD``.
"""

# =============================================================================
# CELL TYPES
# =============================================================================

EXCITATORY_FRACTION = 0.8
"""Probability that a neuron is excitatory (Dale's 80/20 split)."""

SPIKE_AMPLITUDE = 1.0
"""Magnitude of an emitted spike. Sign encodes polarity (+E / -I)."""
