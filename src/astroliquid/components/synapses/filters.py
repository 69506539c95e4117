"""
Synaptic conduction filter.

The postsynaptic current of a synapse is the presynaptic spike-amplitude
history convolved with a fixed causal kernel. The kernel is an alpha
function sampled at t = 1 .. length, so a spike emitted on tick n already
contributes ``h(1)`` to the current read by neurons on tick n + 1, peaks
``tau`` ticks later and then decays.
"""

from __future__ import annotations

import math
from typing import Union

import torch

from astroliquid.constants import synapse as synapse_constants


def alpha_synaptic_filter(
    t: Union[float, torch.Tensor],
    tau: float = synapse_constants.FILTER_TAU,
) -> Union[float, torch.Tensor]:
    """Alpha function ``(t / τ) · exp(1 - t / τ)`` for t >= 0, else 0.

    Peaks at 1.0 when t = τ.
    """
    if isinstance(t, torch.Tensor):
        value = (t / tau) * torch.exp(1.0 - t / tau)
        return torch.where(t >= 0, value, torch.zeros_like(value))
    if t < 0:
        return 0.0
    return (t / tau) * math.exp(1.0 - t / tau)


def alpha_kernel(
    length: int = synapse_constants.FILTER_LENGTH,
    tau: float = synapse_constants.FILTER_TAU,
    dtype: torch.dtype = torch.float64,
    device: Union[str, torch.device] = "cpu",
) -> torch.Tensor:
    """Alpha-function kernel evaluated at t = 1 .. length [length]."""
    t = torch.arange(1, length + 1, dtype=dtype, device=device)
    return alpha_synaptic_filter(t, tau)


def causal_filter_output(history: torch.Tensor, kernel: torch.Tensor) -> torch.Tensor:
    """Newest sample of the causal convolution of each row with ``kernel``.

    Computes ``y[n] = Σ_k kernel[k] · x[n - k]`` at the last index n of each
    row, using only as many taps as there are samples (the history is
    clipped at simulation start).

    Args:
        history: Spike amplitudes [n_rows, n_ticks], oldest first
        kernel: Filter taps [n_taps]

    Returns:
        Filter output at the newest tick [n_rows]
    """
    n_taps = min(history.shape[-1], kernel.shape[0])
    if n_taps == 0:
        return history.new_zeros(history.shape[:-1])
    newest_first = history[..., -n_taps:].flip(-1)
    return newest_first @ kernel[:n_taps].to(history)
