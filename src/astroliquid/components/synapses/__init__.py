"""Synapses of the liquid: connectivity, conduction filter, plastic population."""

from __future__ import annotations

from astroliquid.components.synapses.connectivity import (
    ConnectionType,
    build_connectivity,
    connection_codes,
    connection_probability,
    sample_weight_pool,
    type_constants,
)
from astroliquid.components.synapses.filters import (
    alpha_kernel,
    alpha_synaptic_filter,
    causal_filter_output,
)
from astroliquid.components.synapses.synapse import LiquidSynapses

__all__ = [
    # Connectivity
    "ConnectionType",
    "build_connectivity",
    "connection_codes",
    "connection_probability",
    "sample_weight_pool",
    "type_constants",
    # Filter
    "alpha_kernel",
    "alpha_synaptic_filter",
    "causal_filter_output",
    # Population
    "LiquidSynapses",
]
