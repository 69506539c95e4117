"""
Astrocyte Population - Leaky-integration (LIM) feedback on synaptic depression.

Each astrocyte monitors a fixed random subset of synapses and compares the
spiking of their presynaptic neurons with the external drive:

    liquid_rate = Σ_links Σ_window |pre spike| / window
    input_rate  = Σ_window Σ_channels |drive| / window

    dA/dt = (-A · Γ + w · (liquid_rate - input_rate) + b) / τ

Both rates are normalized by the same window length, so they stay comparable
for any averaging window. Activity is not clamped; it is the depression
coefficient A- that linked synapses read on the next tick.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import torch
import torch.nn as nn

from astroliquid.components.neurons.lif import LiquidNeurons
from astroliquid.components.synapses.synapse import LiquidSynapses
from astroliquid.config.astrocyte_config import AstrocyteConfig
from astroliquid.units import ActivityTensor

logger = logging.getLogger(__name__)


class AstrocytePopulation(nn.Module):
    """Population of LIM astrocytes.

    Args:
        n_astrocytes: Number of astrocytes
        config: Astrocyte parameters
        dtype: State dtype
        device: State device
    """

    def __init__(
        self,
        n_astrocytes: int,
        config: Optional[AstrocyteConfig] = None,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ):
        super().__init__()
        self.n_astrocytes = n_astrocytes
        self.config = config or AstrocyteConfig()
        cfg = self.config

        def _full(value: float) -> torch.Tensor:
            return torch.full((n_astrocytes,), value, dtype=dtype, device=device)

        self.register_buffer("activity", _full(cfg.activity_initial))
        self.register_buffer("tau", _full(cfg.tau))
        self.register_buffer("input_gain", _full(cfg.input_gain))
        self.register_buffer("bias", _full(cfg.bias))
        self.register_buffer("decay_gain", _full(cfg.decay_gain))

        # Link table (astrocyte handle, synapse handle)
        self.register_buffer("link_astrocyte", torch.zeros(0, dtype=torch.long, device=device))
        self.register_buffer("link_synapse", torch.zeros(0, dtype=torch.long, device=device))

    def link(
        self,
        synapses: LiquidSynapses,
        generator: Optional[torch.Generator] = None,
    ) -> None:
        """Sample each astrocyte's monitored synapses and register both sides.

        Every astrocyte draws ``synapses_per_astrocyte`` distinct synapses
        uniformly at random, or all of them when fewer exist.
        """
        n_synapses = synapses.n_synapses
        per_astrocyte = min(self.config.synapses_per_astrocyte, n_synapses)

        astrocyte_index = []
        synapse_index = []
        for a in range(self.n_astrocytes):
            chosen = torch.randperm(n_synapses, generator=generator)[:per_astrocyte]
            astrocyte_index.append(torch.full((per_astrocyte,), a, dtype=torch.long))
            synapse_index.append(chosen)

        device = self.link_synapse.device
        if astrocyte_index:
            self.link_astrocyte = torch.cat(astrocyte_index).to(device)
            self.link_synapse = torch.cat(synapse_index).to(device)

        synapses.register_astrocytes(self.link_astrocyte, self.link_synapse)
        logger.info(
            f"Linked {self.n_astrocytes} astrocytes to {per_astrocyte} synapses each"
        )

    def linked_synapses(self, astrocyte: int) -> torch.Tensor:
        """Handles of the synapses monitored by ``astrocyte``."""
        return self.link_synapse[self.link_astrocyte == astrocyte]

    def rates(
        self,
        neurons: LiquidNeurons,
        synapses: LiquidSynapses,
        drive_window: torch.Tensor,
    ) -> Tuple[torch.Tensor, torch.Tensor]:
        """Window-normalized liquid and input rates.

        Args:
            neurons: Neuron population (spike history source)
            synapses: Synapse population (presynaptic handles)
            drive_window: Applied drive vectors [w, n_channels], oldest first

        Returns:
            liquid_rate: Per-astrocyte liquid rate [n_astrocytes]
            input_rate: Scalar input rate (shared by all astrocytes)
        """
        window = drive_window.shape[0]
        if window == 0:
            zero = self.activity.new_zeros(())
            return self.activity.new_zeros(self.n_astrocytes), zero

        input_rate = drive_window.to(self.activity).abs().sum() / window

        # Spiking per neuron over the same window, then per link via the
        # presynaptic neuron of the linked synapse
        per_neuron = neurons.recent_spikes(window).abs().sum(dim=1).to(self.activity)
        per_link = per_neuron[synapses.pre_index[self.link_synapse]]
        liquid = self.activity.new_zeros(self.n_astrocytes).index_add_(
            0, self.link_astrocyte, per_link
        )
        return liquid / window, input_rate

    def forward(
        self,
        neurons: LiquidNeurons,
        synapses: LiquidSynapses,
        drive_window: torch.Tensor,
        dt: float = 1.0,
    ) -> Tuple[torch.Tensor, torch.Tensor]:
        """Advance every astrocyte by one tick.

        Reads neuron spike history and the drive window only; writes only
        astrocyte activity.

        Returns:
            (liquid_rate, input_rate) used for this update
        """
        liquid_rate, input_rate = self.rates(neurons, synapses, drive_window)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Astrocyte activity before update: mean={self.activity.mean().item():.6f}")

        d_activity = (
            -self.activity * self.decay_gain
            + self.input_gain * (liquid_rate - input_rate)
            + self.bias
        ) / self.tau
        self.activity = self.activity + d_activity * dt

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Astrocyte activity after update: mean={self.activity.mean().item():.6f}, "
                f"liquid_rate={liquid_rate.mean().item():.4f}, "
                f"input_rate={float(input_rate):.4f}"
            )

        return liquid_rate, input_rate

    def get_activity(self) -> ActivityTensor:
        """Current activity of every astrocyte [n_astrocytes]."""
        return ActivityTensor(self.activity)

    def __repr__(self) -> str:
        return (
            f"AstrocytePopulation(n_astrocytes={self.n_astrocytes}, "
            f"links={self.link_synapse.numel()}, tau={self.config.tau})"
        )
