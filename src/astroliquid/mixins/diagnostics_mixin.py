"""
Diagnostics Mixin for liquid populations.

Reusable statistics for the reservoir's ``get_diagnostics()``:

1. Weight statistics (mean, std, min, max, fraction at the bounds)
2. Spike statistics (active fraction, rate, mean |amplitude|)
3. Trace / activity statistics (mean, max, norm)
"""

from __future__ import annotations

from typing import Dict, Optional

import torch


class DiagnosticsMixin:
    """Mixin providing common diagnostic computation patterns.

    All methods are static and use only their arguments, so they work
    regardless of the class structure.
    """

    @staticmethod
    def weight_diagnostics(
        weights: torch.Tensor,
        prefix: str = "",
        w_min: Optional[float] = None,
        w_max: Optional[float] = None,
    ) -> Dict[str, float]:
        """Compute standard weight statistics.

        Args:
            weights: Weight tensor (any shape)
            prefix: Prefix for metric names (e.g., "EE" → "EE_weight_mean")
            w_min: Lower bound; adds the fraction of weights sitting on it
            w_max: Upper bound; adds the fraction of weights sitting on it

        Returns:
            Dict with weight statistics
        """
        prefix = f"{prefix}_" if prefix else ""

        w = weights.detach()

        if w.numel() == 0:
            return {
                f"{prefix}weight_count": 0,
                f"{prefix}weight_mean": 0.0,
                f"{prefix}weight_std": 0.0,
                f"{prefix}weight_min": 0.0,
                f"{prefix}weight_max": 0.0,
            }

        stats = {
            f"{prefix}weight_count": w.numel(),
            f"{prefix}weight_mean": w.mean().item(),
            f"{prefix}weight_std": w.std().item() if w.numel() > 1 else 0.0,
            f"{prefix}weight_min": w.min().item(),
            f"{prefix}weight_max": w.max().item(),
        }

        if w_min is not None:
            stats[f"{prefix}weight_at_min"] = (w <= w_min).double().mean().item()
        if w_max is not None:
            stats[f"{prefix}weight_at_max"] = (w >= w_max).double().mean().item()

        return stats

    @staticmethod
    def spike_diagnostics(
        spikes: torch.Tensor,
        prefix: str = "",
    ) -> Dict[str, float]:
        """Compute spike statistics over a [n_neurons, n_ticks] history.

        Signed amplitudes are counted by magnitude.

        Args:
            spikes: Spike history (one row per neuron)
            prefix: Prefix for metric names

        Returns:
            Dict with spike statistics
        """
        prefix = f"{prefix}_" if prefix else ""

        s = spikes.detach().abs()
        if s.numel() == 0:
            return {
                f"{prefix}firing_rate": 0.0,
                f"{prefix}active_fraction": 0.0,
                f"{prefix}mean_amplitude": 0.0,
                f"{prefix}total_neurons": s.shape[0] if s.dim() > 0 else 0,
            }

        fired = s > 0
        n_spikes = int(fired.sum().item())
        return {
            f"{prefix}firing_rate": fired.double().mean().item(),
            f"{prefix}active_fraction": fired.any(dim=-1).double().mean().item(),
            # Mean |amplitude| over emitted spikes only
            f"{prefix}mean_amplitude": s[fired].mean().item() if n_spikes else 0.0,
            f"{prefix}total_neurons": s.shape[0],
        }

    @staticmethod
    def trace_diagnostics(
        trace: torch.Tensor,
        prefix: str = "",
    ) -> Dict[str, float]:
        """Compute eligibility-trace or activity statistics.

        Args:
            trace: Trace tensor
            prefix: Prefix for metric names

        Returns:
            Dict with trace statistics
        """
        prefix = f"{prefix}_" if prefix else ""

        t = trace.detach()
        if t.numel() == 0:
            return {
                f"{prefix}mean": 0.0,
                f"{prefix}max": 0.0,
                f"{prefix}norm": 0.0,
            }

        return {
            f"{prefix}mean": t.mean().item(),
            f"{prefix}max": t.max().item(),
            f"{prefix}norm": t.norm().item(),
        }
