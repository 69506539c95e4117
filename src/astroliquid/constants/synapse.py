"""
Synapse Constants - Connectivity, weights, conduction filter, STDP.

Connection probability follows the Maass (2002) liquid rule
``C · exp(-(D / λ)²)`` with per-type base constants ``C``.

STDP uses leaky pre/post eligibility traces integrated with explicit Euler.
Depression strength ``A_minus`` is supplied by the astrocytes; the default
below applies to synapses with no linked astrocyte.
"""

# =============================================================================
# CONNECTIVITY
# =============================================================================

C_EE = 0.2
"""Base connection probability, excitatory → excitatory."""

C_EI = 0.1
"""Base connection probability, excitatory → inhibitory."""

C_IE = 0.05
"""Base connection probability, inhibitory → excitatory."""

C_II = 0.3
"""Base connection probability, inhibitory → inhibitory."""

CONNECTION_LAMBDA = 2.0
"""Spatial length constant λ of the connection probability (grid units)."""

# =============================================================================
# WEIGHTS
# =============================================================================

W_MIN = 0.0
"""Lower weight bound."""

W_MAX = 5.5
"""Upper weight bound, also the scale of the initial weight pool."""

WEIGHT_POOL_SIZE = 1000
"""Number of samples in the heavy-tailed initial weight pool."""

WEIGHT_POOL_STD = 2.0
"""Standard deviation of the Gaussian the weight pool is folded from."""

# =============================================================================
# CONDUCTION FILTER
# =============================================================================

FILTER_LENGTH = 30
"""Number of taps of the alpha-function kernel."""

FILTER_TAU = 5.0
"""Time constant of the alpha-function kernel (ticks)."""

FILTER_WINDOW = 100
"""Trailing presynaptic history considered by the causal convolution (ticks)."""

# =============================================================================
# STDP
# =============================================================================

TAU_PLUS = 10.0
"""Presynaptic trace time constant (ticks)."""

TAU_MINUS = 10.0
"""Postsynaptic trace time constant (ticks)."""

TRACE_A_PLUS = 0.1
"""Presynaptic trace increment per unit spike."""

TRACE_A_MINUS = 0.1
"""Postsynaptic trace increment per unit spike."""

A_PLUS = 0.15
"""Potentiation coefficient."""

A_MINUS_DEFAULT = 0.15
"""Depression coefficient for synapses without linked astrocytes."""
