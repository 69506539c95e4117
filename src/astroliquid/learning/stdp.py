"""
Spike-Timing-Dependent Plasticity (STDP) with astrocyte-modulated depression.

Each synapse keeps a presynaptic and a postsynaptic eligibility trace:

- Post spikes while the pre trace is high (pre before post): potentiation
- Pre spikes while the post trace is high (post before pre): depression

Weight change per tick:
    Δw = A+ · T_pre · |post| · dt  -  A- · T_post · |pre| · dt

``A+`` is fixed. ``A-`` is supplied per synapse by the astrocytes that
monitor it, which lets glial activity shift the potentiation/depression
balance of the liquid.
"""

from __future__ import annotations

from typing import Optional, Union

import torch
import torch.nn as nn

from astroliquid.learning.traces import update_trace
from astroliquid.config.learning_config import STDPConfig


def compute_stdp_update(
    pre_spikes: torch.Tensor,
    post_spikes: torch.Tensor,
    trace_pre: torch.Tensor,
    trace_post: torch.Tensor,
    a_plus: float,
    a_minus: Union[float, torch.Tensor],
    dt: float = 1.0,
) -> torch.Tensor:
    """Per-synapse weight change from this tick's spikes and traces.

    Both terms may be nonzero on the same tick; each vanishes when its
    triggering neuron is silent.

    Args:
        pre_spikes: Presynaptic spike amplitude per synapse [n_synapses]
        post_spikes: Postsynaptic spike amplitude per synapse [n_synapses]
        trace_pre: Presynaptic trace [n_synapses]
        trace_post: Postsynaptic trace [n_synapses]
        a_plus: Potentiation coefficient
        a_minus: Depression coefficient, scalar or [n_synapses]
        dt: Time step

    Returns:
        Weight change [n_synapses] (to add to weights before clamping)
    """
    ltp = a_plus * trace_pre * post_spikes.abs() * dt
    ltd = a_minus * trace_post * pre_spikes.abs() * dt
    return ltp - ltd


class AstrocyteModulatedSTDP(nn.Module):
    """Trace-based STDP over a flat list of synapses.

    Args:
        n_synapses: Number of synapses
        config: STDP configuration parameters
        dtype: Trace dtype
        device: Trace device

    Example:
        >>> stdp = AstrocyteModulatedSTDP(n_synapses=500)
        >>> dw = stdp(pre_spikes, post_spikes, a_minus=depression, dt=1.0)
        >>> weight = (weight + dw).clamp(w_min, w_max)
    """

    def __init__(
        self,
        n_synapses: int,
        config: Optional[STDPConfig] = None,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ):
        super().__init__()
        self.n_synapses = n_synapses
        self.config = config or STDPConfig()

        self.register_buffer("trace_pre", torch.zeros(n_synapses, dtype=dtype, device=device))
        self.register_buffer("trace_post", torch.zeros(n_synapses, dtype=dtype, device=device))

    def reset_traces(self) -> None:
        """Reset eligibility traces to zero."""
        self.trace_pre.zero_()
        self.trace_post.zero_()

    def forward(
        self,
        pre_spikes: torch.Tensor,
        post_spikes: torch.Tensor,
        a_minus: Union[float, torch.Tensor, None] = None,
        dt: float = 1.0,
    ) -> torch.Tensor:
        """Update traces, then compute the weight change.

        Args:
            pre_spikes: Presynaptic spike amplitude per synapse [n_synapses]
            post_spikes: Postsynaptic spike amplitude per synapse [n_synapses]
            a_minus: Depression coefficient. None = ``config.a_minus_default``
            dt: Time step

        Returns:
            Weight change [n_synapses]
        """
        cfg = self.config
        if a_minus is None:
            a_minus = cfg.a_minus_default

        update_trace(self.trace_pre, pre_spikes, cfg.tau_plus, dt, cfg.trace_a_plus)
        update_trace(self.trace_post, post_spikes, cfg.tau_minus, dt, cfg.trace_a_minus)

        return compute_stdp_update(
            pre_spikes,
            post_spikes,
            self.trace_pre,
            self.trace_post,
            a_plus=cfg.a_plus,
            a_minus=a_minus,
            dt=dt,
        )

    def __repr__(self) -> str:
        return (
            f"AstrocyteModulatedSTDP(n_synapses={self.n_synapses}, "
            f"τ+={self.config.tau_plus}, τ-={self.config.tau_minus})"
        )
