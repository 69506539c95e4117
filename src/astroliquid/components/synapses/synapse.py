"""
Liquid Synapses - Conduction-filtered, astrocyte-modulated STDP synapses.

Per tick, after the neurons have fired:

1. The presynaptic spike history (trailing ``filter_window`` ticks) is
   convolved with the alpha kernel; the newest causal sample, times the
   synapse weight, becomes the synapse ``current`` that neurons read on the
   next tick.
2. The depression coefficient ``A-`` is the mean activity of the synapse's
   linked astrocytes, or the configured default when none are linked.
3. Pre/post traces and weights are updated by STDP, then weights are
   clamped into their bounds.

The filter is linear in the presynaptic history, so it is evaluated once per
presynaptic neuron and gathered per synapse.
"""

from __future__ import annotations

import logging
from typing import Optional

import torch
import torch.nn as nn

from astroliquid.components.neurons.lif import LiquidNeurons
from astroliquid.components.synapses.connectivity import build_connectivity, connection_codes
from astroliquid.components.synapses.filters import alpha_kernel, causal_filter_output
from astroliquid.config.learning_config import STDPConfig
from astroliquid.config.synapse_config import ConnectivityConfig, LiquidSynapseConfig
from astroliquid.errors import DimensionMismatchError
from astroliquid.learning.stdp import AstrocyteModulatedSTDP
from astroliquid.units import ActivityTensor, WeightTensor
from astroliquid.utils.ring_buffer import RingBuffer

logger = logging.getLogger(__name__)


class LiquidSynapses(nn.Module):
    """Population of recurrent synapses between liquid neurons.

    Args:
        pre_index: Presynaptic neuron per synapse [n_synapses]
        post_index: Postsynaptic neuron per synapse [n_synapses]
        weight: Initial weights [n_synapses]
        config: Weight bounds and conduction filter
        stdp_config: Plasticity parameters
        dtype: State dtype
    """

    def __init__(
        self,
        pre_index: torch.Tensor,
        post_index: torch.Tensor,
        weight: torch.Tensor,
        config: Optional[LiquidSynapseConfig] = None,
        stdp_config: Optional[STDPConfig] = None,
        dtype: torch.dtype = torch.float64,
    ):
        super().__init__()
        self.config = config or LiquidSynapseConfig()
        self.n_synapses = pre_index.shape[0]
        device = weight.device

        if not (post_index.shape[0] == weight.shape[0] == self.n_synapses):
            raise DimensionMismatchError(
                f"pre_index, post_index and weight must have equal length, got "
                f"{self.n_synapses}, {post_index.shape[0]}, {weight.shape[0]}"
            )

        self.register_buffer("pre_index", pre_index.to(device=device, dtype=torch.long))
        self.register_buffer("post_index", post_index.to(device=device, dtype=torch.long))
        self.register_buffer(
            "w_min", torch.full((self.n_synapses,), self.config.w_min, dtype=dtype, device=device)
        )
        self.register_buffer(
            "w_max", torch.full((self.n_synapses,), self.config.w_max, dtype=dtype, device=device)
        )
        self.register_buffer(
            "weight", torch.minimum(torch.maximum(weight.to(dtype), self.w_min), self.w_max)
        )
        self.register_buffer("current", torch.zeros(self.n_synapses, dtype=dtype, device=device))
        self.register_buffer(
            "kernel",
            alpha_kernel(self.config.filter_length, self.config.filter_tau, dtype, device),
        )

        self.stdp = AstrocyteModulatedSTDP(self.n_synapses, stdp_config, dtype=dtype, device=device)
        self.output_buffer = RingBuffer(
            capacity=self.config.output_buffer_length,
            size=self.n_synapses,
            device=device,
            dtype=dtype,
        )

        # Astrocyte links (astrocyte handle, synapse handle)
        self.register_buffer("link_astrocyte", torch.zeros(0, dtype=torch.long, device=device))
        self.register_buffer("link_synapse", torch.zeros(0, dtype=torch.long, device=device))

    @classmethod
    def connect(
        cls,
        neurons: LiquidNeurons,
        config: Optional[LiquidSynapseConfig] = None,
        connectivity: Optional[ConnectivityConfig] = None,
        stdp_config: Optional[STDPConfig] = None,
        generator: Optional[torch.Generator] = None,
    ) -> "LiquidSynapses":
        """Wire a neuron population and register the synapses on it.

        Args:
            neurons: Population providing positions and cell types
            config: Weight bounds and conduction filter
            connectivity: Connection rule
            stdp_config: Plasticity parameters
            generator: Random generator for connection and weight draws
        """
        config = config or LiquidSynapseConfig()
        pre_index, post_index, weight = build_connectivity(
            neurons.positions,
            neurons.spike_amplitude,
            connectivity,
            max_weight=config.w_max,
            generator=generator,
        )
        device = neurons.positions.device
        synapses = cls(
            pre_index.to(device),
            post_index.to(device),
            weight.to(device),
            config=config,
            stdp_config=stdp_config,
            dtype=neurons.membrane.dtype,
        )
        neurons.register_synapses(synapses.pre_index, synapses.post_index)
        logger.info(
            f"Connected {neurons.n_neurons} neurons with {synapses.n_synapses} synapses"
        )
        return synapses

    # =========================================================================
    # STATE ACCESS
    # =========================================================================

    @property
    def trace_pre(self) -> torch.Tensor:
        """Presynaptic eligibility trace [n_synapses]."""
        return self.stdp.trace_pre

    @property
    def trace_post(self) -> torch.Tensor:
        """Postsynaptic eligibility trace [n_synapses]."""
        return self.stdp.trace_post

    def connection_types(self, neurons: LiquidNeurons) -> torch.Tensor:
        """``ConnectionType.code`` of every synapse [n_synapses]."""
        excitatory = neurons.is_excitatory
        return connection_codes(excitatory[self.pre_index], excitatory[self.post_index])

    def postsynaptic_input(self, n_neurons: int) -> torch.Tensor:
        """Sum of synapse currents per postsynaptic neuron [n_neurons]."""
        total = self.current.new_zeros(n_neurons)
        return total.index_add_(0, self.post_index, self.current)

    # =========================================================================
    # ASTROCYTE LINKS
    # =========================================================================

    def register_astrocytes(
        self, astrocyte_index: torch.Tensor, synapse_index: torch.Tensor
    ) -> None:
        """Record (astrocyte, synapse) links on the synapse side."""
        device = self.link_synapse.device
        self.link_astrocyte = torch.cat([self.link_astrocyte, astrocyte_index.to(device)])
        self.link_synapse = torch.cat([self.link_synapse, synapse_index.to(device)])

    def linked_astrocytes(self, synapse: int) -> torch.Tensor:
        """Handles of the astrocytes monitoring ``synapse``."""
        return self.link_astrocyte[self.link_synapse == synapse]

    def depression_scale(self, activity: Optional[ActivityTensor] = None) -> torch.Tensor:
        """Per-synapse depression coefficient A- [n_synapses].

        Mean activity of the linked astrocytes; synapses without links (or
        every synapse when ``activity`` is None) get ``a_minus_default``.
        """
        default = torch.full_like(self.weight, self.stdp.config.a_minus_default)
        if activity is None or self.link_synapse.numel() == 0:
            return default

        total = torch.zeros_like(self.weight).index_add_(
            0, self.link_synapse, activity.to(self.weight)[self.link_astrocyte]
        )
        counts = torch.zeros_like(self.weight).index_add_(
            0, self.link_synapse, torch.ones_like(total[self.link_synapse])
        )
        linked = counts > 0
        return torch.where(linked, total / counts.clamp(min=1.0), default)

    # =========================================================================
    # DYNAMICS
    # =========================================================================

    def filtered_output(self, neurons: LiquidNeurons) -> torch.Tensor:
        """Unweighted conduction-filtered output per synapse [n_synapses]."""
        history = neurons.recent_spikes(self.config.filter_window)
        per_neuron = causal_filter_output(history, self.kernel)
        return per_neuron[self.pre_index]

    def forward(
        self,
        neurons: LiquidNeurons,
        astrocyte_activity: Optional[ActivityTensor] = None,
        dt: float = 1.0,
    ) -> WeightTensor:
        """Advance every synapse by one tick.

        Must run after the neurons have appended this tick's spikes. Reads
        neuron spikes and the previous tick's astrocyte activity; writes only
        synapse state.

        Args:
            neurons: The population the synapses connect
            astrocyte_activity: Activity of all astrocytes [n_astrocytes]
            dt: Time step

        Returns:
            Updated weights [n_synapses]
        """
        filtered = self.filtered_output(neurons)
        self.output_buffer.push(filtered)
        self.current = self.weight * filtered

        a_minus = self.depression_scale(astrocyte_activity)

        spikes = neurons.latest_spikes()
        pre_spikes = spikes[self.pre_index]
        post_spikes = spikes[self.post_index]
        dw = self.stdp(pre_spikes, post_spikes, a_minus=a_minus, dt=dt)

        weight = torch.maximum(self.weight + dw, self.w_min)
        self.weight = torch.minimum(weight, self.w_max)

        return WeightTensor(self.weight)

    def __repr__(self) -> str:
        return (
            f"LiquidSynapses(n_synapses={self.n_synapses}, "
            f"weight_cap=({self.config.w_min}, {self.config.w_max}), "
            f"astrocyte_links={self.link_synapse.numel()})"
        )
