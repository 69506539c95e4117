"""
Spike trace utilities for STDP.

Traces are leaky signals that accumulate spike history for computing
synaptic updates. The liquid integrates them with explicit Euler toward the
current spike magnitude:

    trace += (-trace + amplitude · |spikes|) · dt / tau

The exponential form ``trace · exp(-dt/tau) + amplitude · |spikes|`` is
available for comparison.

Usage:
    trace = update_trace(trace, spikes, tau=10.0, dt=1.0, amplitude=0.1)
"""

from __future__ import annotations

import math

import torch


def update_trace(
    trace: torch.Tensor,
    spikes: torch.Tensor,
    tau: float,
    dt: float = 1.0,
    amplitude: float = 1.0,
    decay_type: str = "euler",
) -> torch.Tensor:
    """Update a spike trace in place.

    Spike magnitude (not just presence) drives the trace, so inhibitory
    spikes of amplitude -1 count the same as excitatory ones.

    Args:
        trace: Current trace tensor [size]
        spikes: Spike amplitudes this tick [size]
        tau: Time constant (ticks)
        dt: Time step
        amplitude: Trace increment per unit spike magnitude
        decay_type: 'euler' (leaky integration) or 'exponential'

    Returns:
        Updated trace tensor (same object, modified in-place)
    """
    drive = spikes.abs().to(trace) * amplitude
    if decay_type == "euler":
        trace.add_((drive - trace) * (dt / tau))
    elif decay_type == "exponential":
        trace.mul_(math.exp(-dt / tau)).add_(drive)
    else:
        raise ValueError(f"Unknown decay_type '{decay_type}'. Choose 'euler' or 'exponential'.")
    return trace
