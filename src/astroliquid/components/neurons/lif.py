"""Current-Based Leaky Integrate-and-Fire (LIF) Neuron Population.

The liquid's neurons integrate external drive plus the filtered output of
their incoming synapses:

**Membrane Dynamics** (explicit Euler):
=======================================
.. math::

    V \\leftarrow V + \\left(-\\frac{V}{\\tau_v} + \\sigma - \\theta \\cdot s\\right) \\Delta t

Where:
- σ: effective input (drive + synaptic input), zero while refractory
- s: 1 if V ≥ θ *before* the update, else 0
- θ: firing threshold

There is no explicit reset potential. A spike subtracts θ through the
``-θ · s`` term, and the result is clamped to ``[v_min, θ + 1]``.

**Spike History**:
Each tick appends one entry per neuron: the neuron's signed spike amplitude
(+1 excitatory, -1 inhibitory) when it fires, 0 otherwise. All neurons
advance together, so the history length is shared by the population and
doubles as the global clock of the reservoir.

**Arena Layout**:
Neurons are rows of tensors. Synapses are registered as index pairs, so
``out_synapses(i)`` / ``in_synapses(i)`` are lookups, not object references.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import torch
import torch.nn as nn

from astroliquid.config.neuron_config import LiquidNeuronConfig
from astroliquid.errors import DimensionMismatchError
from astroliquid.units import DriveTensor, SpikeTensor, VoltageTensor


def pad_drive(drive: torch.Tensor, size: int) -> torch.Tensor:
    """Zero-pad a drive vector to ``size`` entries.

    Args:
        drive: Drive vector [n] with n <= size
        size: Population size

    Returns:
        Drive vector [size]

    Raises:
        DimensionMismatchError: If the drive has more entries than ``size``
    """
    drive = drive.reshape(-1)
    if drive.shape[0] > size:
        raise DimensionMismatchError(
            f"Drive vector has {drive.shape[0]} entries but the population "
            f"has only {size} neurons."
        )
    if drive.shape[0] == size:
        return drive
    return torch.cat([drive, drive.new_zeros(size - drive.shape[0])])


class LiquidNeurons(nn.Module):
    """Population of current-based LIF neurons placed in 3-D space.

    Args:
        positions: Neuron positions [n_neurons, 3]
        spike_amplitude: Signed spike amplitude per neuron [n_neurons]
            (positive = excitatory, negative = inhibitory)
        config: LiquidNeuronConfig with parameters
        dtype: State dtype (float64 by default)
    """

    def __init__(
        self,
        positions: torch.Tensor,
        spike_amplitude: torch.Tensor,
        config: Optional[LiquidNeuronConfig] = None,
        dtype: torch.dtype = torch.float64,
    ):
        super().__init__()
        self.config = config or LiquidNeuronConfig()
        self.n_neurons = positions.shape[0]
        device = positions.device

        if spike_amplitude.shape != (self.n_neurons,):
            raise DimensionMismatchError(
                f"spike_amplitude shape {tuple(spike_amplitude.shape)} does not match "
                f"{self.n_neurons} positions."
            )

        self.register_buffer("positions", positions.to(dtype))
        self.register_buffer("spike_amplitude", spike_amplitude.to(dtype))
        self.register_buffer(
            "v_threshold",
            torch.full((self.n_neurons,), self.config.v_threshold, dtype=dtype, device=device),
        )

        # State variables
        self.register_buffer(
            "membrane",
            torch.full((self.n_neurons,), self.config.v_initial, dtype=dtype, device=device),
        )
        self.register_buffer(
            "last_spike",
            torch.full((self.n_neurons,), float("-inf"), dtype=dtype, device=device),
        )
        self._spike_history: List[torch.Tensor] = []

        # Synapse registry (pre/post neuron index per synapse)
        self.register_buffer("synapse_pre", torch.zeros(0, dtype=torch.long, device=device))
        self.register_buffer("synapse_post", torch.zeros(0, dtype=torch.long, device=device))

    @classmethod
    def from_positions(
        cls,
        positions: torch.Tensor,
        config: Optional[LiquidNeuronConfig] = None,
        generator: Optional[torch.Generator] = None,
        dtype: torch.dtype = torch.float64,
    ) -> "LiquidNeurons":
        """Create a population, drawing each neuron's cell type.

        Each neuron is excitatory with probability ``excitatory_fraction``.

        Args:
            positions: Neuron positions [n_neurons, 3]
            config: Neuron parameters
            generator: Random generator for cell-type draws
        """
        config = config or LiquidNeuronConfig()
        draws = torch.rand(positions.shape[0], generator=generator, dtype=torch.float64)
        ones = torch.ones_like(draws)
        polarity = torch.where(draws < config.excitatory_fraction, ones, -ones)
        amplitude = (polarity * config.spike_amplitude).to(positions.device)
        return cls(positions, amplitude, config=config, dtype=dtype)

    # =========================================================================
    # CELL TYPES
    # =========================================================================

    @property
    def is_excitatory(self) -> torch.Tensor:
        """Boolean mask of excitatory neurons [n_neurons]."""
        return self.spike_amplitude > 0

    @property
    def is_inhibitory(self) -> torch.Tensor:
        """Boolean mask of inhibitory neurons [n_neurons]."""
        return self.spike_amplitude < 0

    # =========================================================================
    # SYNAPSE REGISTRY
    # =========================================================================

    def register_synapses(self, pre_index: torch.Tensor, post_index: torch.Tensor) -> None:
        """Record synapses on their endpoints.

        Synapse ``k`` runs from ``pre_index[k]`` to ``post_index[k]``; the
        position in these tensors is the synapse handle.
        """
        device = self.synapse_pre.device
        self.synapse_pre = torch.cat([self.synapse_pre, pre_index.to(device)])
        self.synapse_post = torch.cat([self.synapse_post, post_index.to(device)])

    def out_synapses(self, neuron: int) -> torch.Tensor:
        """Handles of synapses whose presynaptic neuron is ``neuron``, in creation order."""
        return torch.nonzero(self.synapse_pre == neuron, as_tuple=False).flatten()

    def in_synapses(self, neuron: int) -> torch.Tensor:
        """Handles of synapses whose postsynaptic neuron is ``neuron``, in creation order."""
        return torch.nonzero(self.synapse_post == neuron, as_tuple=False).flatten()

    # =========================================================================
    # SPIKE HISTORY
    # =========================================================================

    @property
    def history_length(self) -> int:
        """Number of ticks simulated so far (shared by all neurons)."""
        return len(self._spike_history)

    @property
    def spike_history(self) -> torch.Tensor:
        """Full spike history [n_neurons, n_ticks]."""
        return self.recent_spikes(self.history_length)

    def recent_spikes(self, window: int) -> torch.Tensor:
        """Trailing spike history [n_neurons, min(window, n_ticks)], oldest first."""
        if window <= 0 or not self._spike_history:
            return self.membrane.new_zeros(self.n_neurons, 0)
        return torch.stack(self._spike_history[-window:], dim=1)

    def latest_spikes(self) -> SpikeTensor:
        """Spike amplitudes emitted on the most recent tick [n_neurons]."""
        if not self._spike_history:
            return SpikeTensor(self.membrane.new_zeros(self.n_neurons))
        return SpikeTensor(self._spike_history[-1])

    def spike_train(self, neuron: int) -> torch.Tensor:
        """Spike history of one neuron [n_ticks]."""
        return self.spike_history[neuron]

    # =========================================================================
    # DYNAMICS
    # =========================================================================

    def forward(
        self,
        current_time: int,
        drive: DriveTensor,
        synaptic_input: Optional[DriveTensor] = None,
        dt: float = 1.0,
    ) -> Tuple[SpikeTensor, VoltageTensor]:
        """Advance every neuron by one tick.

        All inputs are read before any state is written: ``synaptic_input``
        is the per-neuron sum of incoming synapse currents from the previous
        tick, and spike detection uses the pre-update membrane.

        Args:
            current_time: Global tick index
            drive: External drive [n <= n_neurons], zero-padded
            synaptic_input: Summed incoming synaptic current [n_neurons]
            dt: Euler step

        Returns:
            spikes: Emitted amplitudes for this tick [n_neurons]
            membrane: Membrane potentials after the update [n_neurons]
        """
        drive = pad_drive(drive.to(self.membrane), self.n_neurons)
        if synaptic_input is None:
            synaptic_input = torch.zeros_like(self.membrane)
        elif synaptic_input.shape != (self.n_neurons,):
            raise DimensionMismatchError(
                f"synaptic_input shape {tuple(synaptic_input.shape)} does not match "
                f"{self.n_neurons} neurons."
            )

        refractory = (current_time - self.last_spike) < self.config.refractory_period
        sigma = torch.where(refractory, torch.zeros_like(drive), drive + synaptic_input)

        internal_spike = self.membrane >= self.v_threshold

        dv = -self.membrane / self.config.tau_mem + sigma - self.v_threshold * internal_spike
        membrane = self.membrane + dv * dt

        spikes = torch.where(internal_spike, self.spike_amplitude, torch.zeros_like(membrane))
        self.last_spike = torch.where(
            internal_spike, torch.full_like(self.last_spike, float(current_time)), self.last_spike
        )
        self._spike_history.append(spikes)

        membrane = membrane.clamp(min=self.config.v_min)
        self.membrane = torch.minimum(membrane, self.v_threshold + self.config.v_ceiling_offset)

        return SpikeTensor(spikes), VoltageTensor(self.membrane)

    def _apply(self, fn, recurse: bool = True):
        """Apply a function to all tensors, including the spike history.

        This is called by .to(), .cuda(), .cpu() etc. Buffers are handled by
        the parent; the history list is not a buffer and is moved here.
        """
        super()._apply(fn, recurse)
        self._spike_history = [fn(entry) for entry in self._spike_history]
        return self

    def __repr__(self) -> str:
        n_exc = int(self.is_excitatory.sum().item())
        return (
            f"LiquidNeurons(n_neurons={self.n_neurons}, excitatory={n_exc}, "
            f"inhibitory={self.n_neurons - n_exc}, ticks={self.history_length})"
        )
